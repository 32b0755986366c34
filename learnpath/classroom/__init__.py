"""
LearnPath Classroom - Runtime components for content, progress, and navigation.

This module provides:
- CatalogLoader / QuizBankLoader: one-shot async loading of content
- ContentCatalog / QuizBank: read-only lookups
- DocumentStore and key-value media: whole-document persistence
- ProgressStore: item and course completion tracking
- NavigationResolver / ResumePointResolver: ordered traversal and resume
- EnrollmentStore: enrollment record and access checks
- build_dashboard: per-course status summaries
"""

from .catalog import (
    ItemCoordinate,
    ContentCatalog,
    QuizBank,
)

from .loader import (
    LoadState,
    CatalogLoader,
    QuizBankLoader,
    read_config_file,
)

from .storage import (
    KeyValueStorage,
    MemoryStorage,
    SQLiteStorage,
    DocumentStore,
)

from .progress import (
    ProgressStore,
    DEFAULT_PROGRESS_KEY,
    VIDEO_COMPLETION_THRESHOLD,
)

from .navigator import (
    NavigationTarget,
    NavigationResolver,
    ResumePointResolver,
    first_item,
    next_item,
    previous_item,
)

from .enrollment import (
    EnrollmentStore,
    DEFAULT_ENROLLMENT_KEY,
)

from .dashboard import (
    CourseStatus,
    QuizStatus,
    CourseSummary,
    DashboardSummary,
    summarize_course,
    build_dashboard,
)

__all__ = [
    # Catalog
    "ItemCoordinate",
    "ContentCatalog",
    "QuizBank",
    # Loader
    "LoadState",
    "CatalogLoader",
    "QuizBankLoader",
    "read_config_file",
    # Storage
    "KeyValueStorage",
    "MemoryStorage",
    "SQLiteStorage",
    "DocumentStore",
    # Progress
    "ProgressStore",
    "DEFAULT_PROGRESS_KEY",
    "VIDEO_COMPLETION_THRESHOLD",
    # Navigator
    "NavigationTarget",
    "NavigationResolver",
    "ResumePointResolver",
    "first_item",
    "next_item",
    "previous_item",
    # Enrollment
    "EnrollmentStore",
    "DEFAULT_ENROLLMENT_KEY",
    # Dashboard
    "CourseStatus",
    "QuizStatus",
    "CourseSummary",
    "DashboardSummary",
    "summarize_course",
    "build_dashboard",
]
