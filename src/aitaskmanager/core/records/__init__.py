"""Resolution, allocation and mutation of plan and task records."""

from .allocator import next_id, next_plan_id, next_task_id
from .frontmatter import FrontMatter, extract_id, parse_header
from .mutations import FieldMutationError, set_field
from .paths import PLAN, TASK, RecordKind
from .resolver import available_plans, resolve_plan, resolve_task
from .roots import find_root, is_valid_root
from .scanner import RecordDescriptor, list_records

__all__ = [
    "PLAN",
    "TASK",
    "FieldMutationError",
    "FrontMatter",
    "RecordDescriptor",
    "RecordKind",
    "available_plans",
    "extract_id",
    "find_root",
    "is_valid_root",
    "list_records",
    "next_id",
    "next_plan_id",
    "next_task_id",
    "parse_header",
    "resolve_plan",
    "resolve_task",
    "set_field",
]
