"""Admin console: client-side state for the settings and template screens."""

from shopadmin.console.api_client import AdminAPIClient
from shopadmin.console.bulk_operations import BulkOperationCoordinator
from shopadmin.console.dispatcher import UPDATE_OPERATIONS, dispatch_update
from shopadmin.console.json_editor import JSONEditorAdapter
from shopadmin.console.settings_store import SettingsStore
from shopadmin.console.template_filters import (
    DEFAULT_FILTERS,
    FilterState,
    TemplateFilters,
    active_filters_count,
    filter_templates,
)
from shopadmin.console.template_manager import TemplateEditorForm, TemplateManager
from shopadmin.console.template_repository import TemplateRepository

__all__ = [
    "AdminAPIClient",
    "BulkOperationCoordinator",
    "DEFAULT_FILTERS",
    "FilterState",
    "JSONEditorAdapter",
    "SettingsStore",
    "TemplateEditorForm",
    "TemplateFilters",
    "TemplateManager",
    "TemplateRepository",
    "UPDATE_OPERATIONS",
    "active_filters_count",
    "dispatch_update",
    "filter_templates",
]
