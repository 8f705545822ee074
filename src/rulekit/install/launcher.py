"""Launcher installer: rulekit install-cli / install-cli --uninstall.

Writes a small shell launcher (``copy-cursor-rules`` by default) that runs
``rulekit copy`` with the interpreter rulekit is installed under, and keeps
the install directory on ``PATH`` through the user's shell config.
"""

from __future__ import annotations

import re
import shlex
import shutil
import sys
from pathlib import Path
from typing import List, Optional, Tuple

LAUNCHER_MARKER = "# rulekit-launcher"
SHELL_MARKER = "# Added by rulekit installer"


def launcher_script(python: Optional[str] = None) -> str:
    python = python or sys.executable
    return f"""\
#!/bin/sh
{LAUNCHER_MARKER}
# Installed by rulekit install-cli
# To uninstall: rulekit install-cli --uninstall

exec {shlex.quote(python)} -m rulekit copy "$@"
"""


def _path_line_re(install_path: Path) -> re.Pattern[str]:
    # the path must stand alone between separators, so /opt/bin never matches /opt/bin2
    path = re.escape(str(install_path).rstrip("/"))
    return re.compile(r"PATH.*(?<![^\s\"':=])" + path + r"/?(?=[:\"'\s;]|$)")


def path_in_shell_config(install_path: Path, config_file: Path) -> bool:
    """Return True if a PATH line in *config_file* already mentions *install_path*."""
    if not config_file.is_file():
        return False
    pattern = _path_line_re(install_path)
    content = config_file.read_text(encoding="utf-8", errors="replace")
    return any(pattern.search(line) for line in content.splitlines())


def path_export(install_path: Path) -> str:
    return f'export PATH="{install_path}:$PATH"'


def add_path_to_shell_config(install_path: Path, config_file: Path, *, dry_run: bool = False) -> str:
    """Append an ``export PATH`` line for *install_path*. Returns a status message."""
    if path_in_shell_config(install_path, config_file):
        return f"Path already exists in {config_file}"

    export = path_export(install_path)
    if dry_run:
        return f"Would add to {config_file}: {export}"

    config_file.parent.mkdir(parents=True, exist_ok=True)
    with open(config_file, "a", encoding="utf-8") as f:
        f.write(f"\n{SHELL_MARKER}\n{export}\n")
    return f"Added {install_path} to {config_file}"


def remove_path_from_shell_config(install_path: Path, config_file: Path, *, dry_run: bool = False) -> Optional[str]:
    """Drop the installer comment and PATH lines naming *install_path*.

    Returns a status message, or None when the config file does not exist.
    """
    if not config_file.is_file():
        return None
    if not path_in_shell_config(install_path, config_file):
        return f"Path not found in {config_file}"
    if dry_run:
        return f"Would remove path entries from {config_file}"

    pattern = _path_line_re(install_path)
    content = config_file.read_text(encoding="utf-8", errors="replace")
    kept: List[str] = []
    for line in content.splitlines(keepends=True):
        if not pattern.search(line):
            kept.append(line)
            continue
        # drop the installer comment only when it belongs to this entry
        if kept and kept[-1].rstrip("\r\n") == SHELL_MARKER:
            kept.pop()
    config_file.write_text("".join(kept), encoding="utf-8")
    return f"Removed {install_path} from {config_file}"


def _is_launcher(path: Path) -> bool:
    try:
        return LAUNCHER_MARKER in path.read_text(encoding="utf-8", errors="replace")
    except OSError:
        return False


def install_launcher(
    install_path: Path,
    tool_name: str,
    shell_config: Path,
    *,
    force: bool = False,
    dry_run: bool = False,
    modify_shell_config: bool = True,
) -> Tuple[bool, List[str]]:
    """Install the launcher into *install_path*.

    Returns (success, messages).
    """
    target = install_path / tool_name
    messages: List[str] = []

    if target.exists() and not force:
        return False, [
            f"CLI tool already installed at: {target}",
            "Use --force to overwrite or --uninstall to remove",
        ]

    if dry_run:
        if not install_path.is_dir():
            messages.append(f"Would create directory: {install_path}")
        messages.append(f"Would write launcher: {target}")
        messages.append(f"Would make executable: {target}")
        if modify_shell_config:
            messages.append(add_path_to_shell_config(install_path, shell_config, dry_run=True))
        return True, messages

    if not install_path.is_dir():
        try:
            install_path.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            return False, [f"Failed to create directory: {install_path} ({exc.strerror})"]
        messages.append(f"Created directory: {install_path}")

    try:
        target.write_text(launcher_script(), encoding="utf-8")
    except OSError as exc:
        return False, [f"Failed to write launcher to {target} ({exc.strerror})"]

    try:
        target.chmod(0o755)
    except OSError:
        target.unlink(missing_ok=True)
        return False, ["Failed to make launcher executable"]

    messages.append(f"Installed {tool_name} to {target}")

    if modify_shell_config:
        messages.append(add_path_to_shell_config(install_path, shell_config))

    return True, messages


def uninstall_launcher(
    install_path: Path,
    tool_name: str,
    shell_config: Path,
    *,
    dry_run: bool = False,
) -> Tuple[bool, List[str]]:
    """Remove the launcher and its shell config entries.

    Returns (success, messages); success is False when nothing was installed.
    """
    target = install_path / tool_name
    messages: List[str] = []
    candidates: List[Path] = []

    if target.is_file():
        candidates.append(target)

    # another copy earlier on PATH, only if it is one of ours
    on_path = shutil.which(tool_name)
    if on_path is not None:
        other = Path(on_path)
        if other.resolve() != target.resolve() and _is_launcher(other):
            candidates.append(other)

    for path in candidates:
        if dry_run:
            messages.append(f"Would remove: {path}")
            continue
        try:
            path.unlink()
        except OSError as exc:
            messages.append(f"Failed to remove: {path} ({exc.strerror})")
            continue
        messages.append(f"Removed: {path}")

    shell_msg = remove_path_from_shell_config(install_path, shell_config, dry_run=dry_run)
    if shell_msg:
        messages.append(shell_msg)

    if not candidates:
        messages.append("No installation found to remove")
        return False, messages
    return True, messages
