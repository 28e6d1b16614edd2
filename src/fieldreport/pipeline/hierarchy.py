"""Cascading option lists for the region → province → commune → douar selects.

Options are a pure function of (all rows, current selection): every call
recomputes from scratch, so the order rows arrived in over the network
never leaks into the UI. Values are compared exactly after trimming;
spelling or diacritic variants of the same place stay separate options.
"""

from functools import lru_cache

from pyuca import Collator

from fieldreport.core.types import AdministrativeRow, HierarchyOptions, Selection


@lru_cache(maxsize=1)
def _collator() -> Collator:
    # Loads the DUCET table once per process
    return Collator()


def collate(values) -> list[str]:
    """Distinct non-empty values in Unicode collation order (Arabic alphabetical)."""
    key = _collator().sort_key
    return sorted({v for v in values if v}, key=lambda v: (key(v), v))


def derive_options(
    rows: list[AdministrativeRow],
    selection: Selection | None = None,
    region_allow_list: set[str] | None = None,
) -> HierarchyOptions:
    """Derive the candidate values at each hierarchy level.

    A level is only populated once the level above it is selected, and it
    is filtered by every selected ancestor, not just the parent.

    Args:
        rows: Full administrative row set.
        selection: Current region/province/commune; blanks mean unselected.
        region_allow_list: If given, rows whose region is not literally in
            the set are hidden at every level.
    """
    selection = selection or Selection()
    region = selection.region.strip()
    province = selection.province.strip()
    commune = selection.commune.strip()

    if region_allow_list is not None:
        rows = [r for r in rows if r.region in region_allow_list]

    options = HierarchyOptions(regions=collate(r.region for r in rows))
    if not region:
        return options

    in_region = [r for r in rows if r.region == region]
    options.provinces = collate(r.province for r in in_region)
    if not province:
        return options

    in_province = [r for r in in_region if r.province == province]
    options.communes = collate(r.commune for r in in_province)
    if not commune:
        return options

    options.douars = collate(r.douar for r in in_province if r.commune == commune)
    return options
