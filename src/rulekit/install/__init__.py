"""Copy rules between projects, install categories, install the launcher."""

from rulekit.install.categories import (
    CategoryNotFoundError,
    available_rules,
    plan_all,
    plan_category,
)
from rulekit.install.copier import (
    CopyAction,
    CopyError,
    PermissionDeniedError,
    SourceNotFoundError,
    copy_file,
    plan_flattened,
    plan_structured,
    resolve_source,
)
from rulekit.install.launcher import install_launcher, uninstall_launcher

__all__ = [
    "CategoryNotFoundError",
    "CopyAction",
    "CopyError",
    "PermissionDeniedError",
    "SourceNotFoundError",
    "available_rules",
    "copy_file",
    "install_launcher",
    "plan_all",
    "plan_category",
    "plan_flattened",
    "plan_structured",
    "resolve_source",
    "uninstall_launcher",
]
