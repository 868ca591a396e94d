"""Common module: shared utilities for StaffSphere."""

from staffsphere.common.constants import (
    DEFAULT_PAGE_SIZE,
    DEPARTMENTS,
    MAX_PAGE_SIZE,
    ActivityStatus,
    ActivityType,
    Collection,
    EmployeeStatus,
    LeaveStatus,
    LeaveType,
    TaskPriority,
    TaskStatus,
)
from staffsphere.common.exceptions import (
    AppException,
    AuthenticationRequired,
    NotFoundException,
    RecordStoreError,
    ShellLoadingException,
    ValidationException,
    register_exception_handlers,
)
from staffsphere.common.filters import apply_filters, apply_sorting, filter_records
from staffsphere.common.icons import Icon, get_icon
from staffsphere.common.pagination import (
    PaginatedResponse,
    PaginationMeta,
    PaginationParams,
    build_meta,
    fetch_page,
)

__all__ = [
    # Constants / Enums
    "ActivityStatus",
    "ActivityType",
    "Collection",
    "EmployeeStatus",
    "LeaveStatus",
    "LeaveType",
    "TaskPriority",
    "TaskStatus",
    "DEFAULT_PAGE_SIZE",
    "DEPARTMENTS",
    "MAX_PAGE_SIZE",
    # Exceptions
    "AppException",
    "AuthenticationRequired",
    "NotFoundException",
    "RecordStoreError",
    "ShellLoadingException",
    "ValidationException",
    "register_exception_handlers",
    # Filters
    "apply_filters",
    "apply_sorting",
    "filter_records",
    # Icons
    "Icon",
    "get_icon",
    # Pagination
    "PaginatedResponse",
    "PaginationMeta",
    "PaginationParams",
    "build_meta",
    "fetch_page",
]
