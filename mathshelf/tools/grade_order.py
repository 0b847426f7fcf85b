"""Display order of grades on the shelf: elementary, middle, high, then the rest."""
import locale
from functools import cmp_to_key

from mathshelf.models.catalog import Catalog, Grade


def grade_priority(name: str) -> int:
    """1=초등, 2=중학/중등, 3=고등, 4=anything else."""
    if "초등" in name:
        return 1
    if "중학" in name or "중등" in name:
        return 2
    if "고등" in name:
        return 3
    return 4


def _cmp(a, b) -> int:
    return (a > b) - (a < b)


def compare_grades(a: Grade, b: Grade) -> int:
    """
    Total order over grades.

    Priority first, then locale collation of the name. Names that collate
    equal fall back to code points and finally to the id, so no two distinct
    grades compare equal and the result never depends on sort stability.
    """
    result = _cmp(grade_priority(a.name), grade_priority(b.name))
    if result:
        return result
    result = locale.strcoll(a.name, b.name)
    if result:
        return _cmp(result, 0)
    result = _cmp(a.name, b.name)
    if result:
        return result
    return _cmp(a.id, b.id)


def sorted_grades(catalog: Catalog) -> list[Grade]:
    """Grades in display order. The stored order is left untouched."""
    return sorted(catalog.grades, key=cmp_to_key(compare_grades))
