"""Project metadata rewriting.

After the template is cloned, the README heading and the package.json
name and store settings are rewritten to match the new theme. Missing
files are skipped without complaint.
"""

import json
import re
from pathlib import Path
from typing import Any, Dict, List, Union

from .exceptions import FileOperationError

README_FILE = "README.md"
MANIFEST_FILE = "package.json"

HEADING_PATTERN = re.compile(r"^# [^\r\n]*", re.MULTILINE)


def rewrite_readme(project_dir: Union[str, Path], theme_name: str) -> bool:
    """Replace the first top-level heading in README.md with the theme name.

    Args:
        project_dir: Project directory
        theme_name: New project name

    Returns:
        True if the file was rewritten, False if there is no README

    Raises:
        FileOperationError: If the file cannot be read or written
    """
    readme_path = Path(project_dir) / README_FILE
    if not readme_path.is_file():
        return False

    # newline="" keeps the file's own line endings on both read and write
    try:
        with open(readme_path, "r", encoding="utf-8", newline="") as f:
            content = f.read()
    except UnicodeDecodeError as e:
        raise FileOperationError(f"{README_FILE} is not valid UTF-8: {e}", file_path=str(readme_path), operation="read")
    except OSError as e:
        raise FileOperationError(f"Failed to read {README_FILE}: {e}", file_path=str(readme_path), operation="read")

    # Replacement is a function so backslashes in the name stay literal
    content = HEADING_PATTERN.sub(lambda _: f"# {theme_name}", content, count=1)

    try:
        with open(readme_path, "w", encoding="utf-8", newline="") as f:
            f.write(content)
    except OSError as e:
        raise FileOperationError(f"Failed to write {README_FILE}: {e}", file_path=str(readme_path), operation="write")

    return True


def update_manifest_data(manifest: Dict[str, Any], theme_name: str, store_url: str = "") -> Dict[str, Any]:
    """Set the package name and, if given, the store URL on manifest data.

    Existing keys keep their order; ``name`` and ``config`` are updated in place.
    """
    manifest["name"] = theme_name

    if store_url:
        config = manifest.get("config")
        if not isinstance(config, dict):
            config = {}
            manifest["config"] = config
        config["shopifyStore"] = store_url

    return manifest


def rewrite_manifest(project_dir: Union[str, Path], theme_name: str, store_url: str = "") -> bool:
    """Rewrite package.json with the theme name and store URL.

    Args:
        project_dir: Project directory
        theme_name: New package name
        store_url: Store URL for ``config.shopifyStore``; left alone when empty

    Returns:
        True if the file was rewritten, False if there is no package.json

    Raises:
        FileOperationError: If the file cannot be read, parsed or written
    """
    manifest_path = Path(project_dir) / MANIFEST_FILE
    if not manifest_path.is_file():
        return False

    try:
        with open(manifest_path, "r", encoding="utf-8") as f:
            manifest = json.load(f)
    except UnicodeDecodeError as e:
        raise FileOperationError(f"{MANIFEST_FILE} is not valid UTF-8: {e}", file_path=str(manifest_path), operation="read")
    except json.JSONDecodeError as e:
        raise FileOperationError(f"Failed to parse {MANIFEST_FILE}: {e}", file_path=str(manifest_path), operation="parse")
    except OSError as e:
        raise FileOperationError(f"Failed to read {MANIFEST_FILE}: {e}", file_path=str(manifest_path), operation="read")

    if not isinstance(manifest, dict):
        raise FileOperationError(
            f"{MANIFEST_FILE} must contain a JSON object",
            file_path=str(manifest_path),
            operation="parse",
        )

    update_manifest_data(manifest, theme_name, store_url)

    try:
        with open(manifest_path, "w", encoding="utf-8") as f:
            json.dump(manifest, f, indent=2, ensure_ascii=False)
            f.write("\n")
    except OSError as e:
        raise FileOperationError(f"Failed to write {MANIFEST_FILE}: {e}", file_path=str(manifest_path), operation="write")

    return True


def update_project_files(project_dir: Union[str, Path], theme_name: str, store_url: str = "") -> List[str]:
    """Rewrite README.md and package.json in the project.

    Returns:
        Names of the files that were rewritten

    Raises:
        FileOperationError: On the first file that cannot be rewritten
    """
    updated = []
    if rewrite_readme(project_dir, theme_name):
        updated.append(README_FILE)
    if rewrite_manifest(project_dir, theme_name, store_url):
        updated.append(MANIFEST_FILE)
    return updated
