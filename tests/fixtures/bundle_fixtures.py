"""Document builders and bundle fixtures for tests.

Builders return plain dicts so that tests can tweak them before validation.
"""

import json
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Generator, List, Optional
import tempfile

from screenspec.schemas.document import SpecificationDocument


FIXTURE_BUNDLE_DIR = Path(__file__).parent / "bundle"


def text_field(component_id: str, **kwargs: Any) -> Dict[str, Any]:
    return {"id": component_id, "type": "text_field", **kwargs}


def button(component_id: str, **kwargs: Any) -> Dict[str, Any]:
    return {"id": component_id, "type": "button", "text": component_id, **kwargs}


def make_document(
    screens: List[Dict[str, Any]],
    rules: Optional[List[Dict[str, Any]]] = None,
    transitions: Optional[List[Dict[str, Any]]] = None,
    login_screen: Optional[str] = None,
) -> SpecificationDocument:
    """Validate a minimal document built from the given sections."""
    data: Dict[str, Any] = {
        "screens": screens,
        "rules": rules or [],
        "transitions": transitions or [],
    }
    if login_screen:
        data["operational_rules"] = {"access": {"login_screen": login_screen}}
    return SpecificationDocument.model_validate(data)


@contextmanager
def temporary_bundle(
    document: Dict[str, Any],
    assets: Optional[Dict[str, str]] = None,
    document_file: str = "bundle.json",
) -> Generator[Path, None, None]:
    """Context manager writing a bundle directory that is removed on exit.

    Args:
        document: Raw document data, written as JSON
        assets: Bundle-relative path -> base64 text
        document_file: Document file name inside the bundle
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        root = Path(tmpdir) / "bundle"
        root.mkdir()
        (root / document_file).write_text(json.dumps(document), encoding="utf-8")
        for relative, content in (assets or {}).items():
            path = root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        yield root
