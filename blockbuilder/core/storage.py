import json
import os
from pathlib import Path
from typing import Any

from .errors import StorageError
from .layout import layout_from_site, site_from_layout
from .models import Site

SITE_VERSION = 1
PROJECT_SUFFIX = ".blocksite"


def site_to_dict(site: Site) -> dict:
    return {
        "name": site.name,
        "version": SITE_VERSION,
        "theme": site.theme,
        "layout": layout_from_site(site),
    }


def save_site(path: str | Path, site: Site) -> None:
    """Write ``site`` to ``path``; the previous file survives a failed write."""
    path = Path(path)
    try:
        payload = json.dumps(site_to_dict(site), indent=2, ensure_ascii=False)
    except (TypeError, ValueError) as exc:
        raise StorageError(f"Site contains values that cannot be saved: {exc}", str(path)) from exc
    tmp = path.with_name(f"{path.name}.tmp")
    try:
        tmp.write_text(payload, encoding="utf-8")
        os.replace(tmp, path)
    except OSError as exc:
        tmp.unlink(missing_ok=True)
        raise StorageError(f"Could not write site file: {exc.strerror or exc}", str(path)) from exc


def read_layout(path: str | Path) -> Any:
    """Return the parsed JSON payload stored at ``path``."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise StorageError(f"Could not read file: {exc.strerror or exc}", str(path)) from exc
    except UnicodeDecodeError as exc:
        raise StorageError("File is not valid UTF-8 text", str(path)) from exc
    try:
        return json.loads(text)
    except ValueError as exc:
        raise StorageError(f"File is not valid JSON: {exc}", str(path)) from exc


def load_site(path: str | Path) -> Site:
    return site_from_layout(read_layout(path))
