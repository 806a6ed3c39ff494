"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "sync-config.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Synchronization configuration for devops-result-sync.
# Replace every <REQUIRED> placeholder before running init-store or finalize.
# Replace <OPTIONAL> placeholders only when your setup needs them.
#
# Identifiers of existing resources and the access token are read from the
# environment: PLAN_ID, ROOT_SUITE_ID, SUITE_ID, RUN_ID, AZURE_PAT.

# Project-level API root, e.g. https://dev.azure.com/<organization>/<project>/_apis
server_url: "<REQUIRED>"
api_version: "5.0"
timeout_seconds: 30
# Disable only for self-signed internal endpoints.
verify_tls: true

plan:
  name: "<REQUIRED>"
  area_path: "<REQUIRED>"
  iteration_path: "<REQUIRED>"

suite:
  # A timestamp is appended to the name of every created suite.
  name: "<REQUIRED>"
  # Work-item query defining the dynamic suite membership. The default selects
  # every test case of the project; narrow it with a custom field, e.g.
  # query: >-
  #   SELECT [System.Id] FROM WorkItems
  #   WHERE [System.TeamProject] = @project
  #   AND [System.WorkItemType] IN GROUP 'Microsoft.TestCaseCategory'
  #   AND [Custom.AutomationStatus] IN ('Automated')
  # query: "<OPTIONAL>"

run:
  name: "<REQUIRED>"
  # Link appended to every reconciled result comment.
  # report_url: "<OPTIONAL>"

record_store:
  directory: "target"
  parallelism: 4
"""


def build_placeholder_configuration() -> str:
    """Build a YAML configuration template with placeholders and inline guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the placeholder configuration template to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Configuration file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()
