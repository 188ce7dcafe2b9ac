"""
Utility module for loading specification documents and bundles.

A bundle is a directory holding the document (JSON or YAML) plus the
base64 image assets it references:

    bundle/
      bundle.json
      images_base64/
        logo.b64.txt
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple

import yaml
from pydantic import ValidationError

from screenspec.config.settings import InterpreterSettings
from screenspec.runtime.assets import AssetRegistry, AssetResolver
from screenspec.schemas.document import RuleSpec, ScreenSpec, SpecificationDocument, TextFieldComponent

logger = logging.getLogger(__name__)


class DocumentLoadError(Exception):
    """Raised when a specification document cannot be loaded or is invalid."""
    pass


@dataclass
class Bundle:
    """A loaded document together with its asset resolver."""

    root: Path
    document: SpecificationDocument
    assets: AssetResolver


def _read_raw(file_path: Path) -> Dict[str, Any]:
    try:
        with open(file_path, "r", encoding="utf-8") as f:
            if file_path.suffix.lower() in (".yaml", ".yml"):
                raw = yaml.safe_load(f)
            else:
                raw = json.load(f)
    except FileNotFoundError:
        raise DocumentLoadError(f"Document file not found: {file_path}")
    except json.JSONDecodeError as e:
        raise DocumentLoadError(f"Invalid JSON in document file: {e}")
    except yaml.YAMLError as e:
        raise DocumentLoadError(f"Invalid YAML in document file: {e}")
    except UnicodeDecodeError as e:
        raise DocumentLoadError(f"Document file is not valid UTF-8: {file_path} ({e})")
    except OSError as e:
        raise DocumentLoadError(f"Cannot read document file {file_path}: {e}")

    if not isinstance(raw, dict):
        raise DocumentLoadError("Document must be a mapping at the top level")

    return raw


def parse_document(raw: Dict[str, Any]) -> SpecificationDocument:
    """
    Validate raw document data into a SpecificationDocument.

    Raises:
        DocumentLoadError: If the data violates the document schema or its
            reference invariants
    """
    if "screens" not in raw:
        raise DocumentLoadError("Document must contain 'screens' key")

    try:
        return SpecificationDocument.model_validate(raw)
    except ValidationError as e:
        raise DocumentLoadError(f"Invalid specification document: {e}")


def load_document(file_path: str | Path) -> SpecificationDocument:
    """
    Load and validate a specification document file.

    Args:
        file_path: Path to a .json, .yaml or .yml document

    Returns:
        Validated SpecificationDocument

    Raises:
        DocumentLoadError: If the file cannot be read, parsed or validated
    """
    file_path = Path(file_path)
    document = parse_document(_read_raw(file_path))
    logger.debug(
        f"Loaded document {file_path}: {len(document.screens)} screens, "
        f"{len(document.rules)} rules, {len(document.transitions)} transitions"
    )
    return document


def load_bundle(bundle_dir: str | Path, settings: Optional[InterpreterSettings] = None) -> Bundle:
    """
    Load a bundle directory: the document plus its base64 assets.

    Args:
        bundle_dir: Bundle root directory
        settings: Interpreter settings (document file name, asset layout).
            Defaults are used if not provided.

    Returns:
        Bundle with the validated document and an eagerly-loaded asset resolver

    Raises:
        DocumentLoadError: If the directory or document is missing or invalid
    """
    settings = settings or InterpreterSettings()
    root = Path(bundle_dir)
    if not root.is_dir():
        raise DocumentLoadError(f"Bundle directory not found: {root}")

    document = load_document(root / settings.document_file)
    registry = AssetRegistry.from_directory(root, settings.asset_dirs, settings.asset_suffix)
    assets = AssetResolver(
        registry,
        asset_dirs=settings.asset_dirs,
        suffix=settings.asset_suffix,
        image_mime=settings.image_mime,
    )
    return Bundle(root=root, document=document, assets=assets)


def iter_text_fields(document: SpecificationDocument) -> Iterator[Tuple[ScreenSpec, TextFieldComponent]]:
    """Yield (screen, text field) for every text field in the document."""
    for screen in document.screens:
        for component in screen.components:
            if isinstance(component, TextFieldComponent):
                yield screen, component


def rules_by_event(document: SpecificationDocument) -> Dict[str, List[RuleSpec]]:
    """Group rules by the event they react to, preserving document order."""
    grouped: Dict[str, List[RuleSpec]] = {}
    for rule in document.rules:
        grouped.setdefault(rule.on_event, []).append(rule)
    return grouped
