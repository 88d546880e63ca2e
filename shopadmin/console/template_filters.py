"""Client-side filtering of notification templates."""

from collections.abc import Sequence
from dataclasses import dataclass, fields, replace

from shopadmin.schemas.template import TemplateResponse


@dataclass(frozen=True)
class TemplateFilters:
    search: str = ""
    type: str = "all"
    category: str = "all"
    status: str = "all"


DEFAULT_FILTERS = TemplateFilters()


def _matches(template: TemplateResponse, filters: TemplateFilters) -> bool:
    if filters.search:
        needle = filters.search.lower()
        haystacks = (template.name, template.description or "")
        if not any(needle in text.lower() for text in haystacks):
            return False

    if filters.type != "all" and template.type != filters.type:
        return False

    if filters.category != "all" and template.category != filters.category:
        return False

    if filters.status == "active" and not template.is_active:
        return False
    if filters.status == "inactive" and template.is_active:
        return False

    return True


def filter_templates(
    templates: Sequence[TemplateResponse],
    filters: TemplateFilters = DEFAULT_FILTERS,
) -> list[TemplateResponse]:
    """Templates matching every filter, in their original order."""
    return [t for t in templates if _matches(t, filters)]


def active_filters_count(filters: TemplateFilters) -> int:
    """Number of filters that differ from their default value."""
    return sum(
        1
        for field in fields(TemplateFilters)
        if getattr(filters, field.name) != getattr(DEFAULT_FILTERS, field.name)
    )


class FilterState:
    """Current filters over a template list, with a memoized filtered view."""

    def __init__(self, templates: Sequence[TemplateResponse] = ()):
        self.filters = DEFAULT_FILTERS
        self._templates = list(templates)
        self._version = 0
        self._cache_key: tuple | None = None
        self._cache: list[TemplateResponse] = []

    @property
    def templates(self) -> list[TemplateResponse]:
        return self._templates

    def set_templates(self, templates: Sequence[TemplateResponse]) -> None:
        self._templates = templates if isinstance(templates, list) else list(templates)
        self._version += 1

    def update_filter(self, key: str, value: str) -> TemplateFilters:
        self.filters = replace(self.filters, **{key: value})
        return self.filters

    def reset_filters(self) -> TemplateFilters:
        self.filters = DEFAULT_FILTERS
        return self.filters

    @property
    def active_count(self) -> int:
        return active_filters_count(self.filters)

    @property
    def filtered(self) -> list[TemplateResponse]:
        key = (self._version, self.filters)
        if key != self._cache_key:
            self._cache = filter_templates(self._templates, self.filters)
            self._cache_key = key
        return self._cache
