from .normalizer import normalize_ingredient_text
from .parser import parse_ingredient_list, group_entries, is_sub_entry, SUB_ENTRY_PREFIX

__all__ = [
    "normalize_ingredient_text",
    "parse_ingredient_list",
    "group_entries",
    "is_sub_entry",
    "SUB_ENTRY_PREFIX",
]
