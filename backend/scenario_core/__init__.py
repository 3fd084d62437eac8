# Scenario core: draft, section edits, metrics, validation, YAML rendering
from scenario_core.draft import ScenarioDraft, default_draft
from scenario_core.metrics import power_expectation
from scenario_core.serializer import export_filename, render
from scenario_core.validation import validate_for_export

__all__ = [
    "ScenarioDraft",
    "default_draft",
    "export_filename",
    "power_expectation",
    "render",
    "validate_for_export",
]
