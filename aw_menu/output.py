"""Script Filter JSON output: the success document and the single-item error document."""

from __future__ import annotations

import json
import logging
import sys
from typing import Any, Callable, Dict, Optional, TextIO

from aw_common.errors import AWError, error_to_payload
from aw_menu.collection import MenuCollection

logger = logging.getLogger(__name__)

ERROR_UID = "error"
ERROR_TITLE = "Error"


def error_document(error: BaseException) -> Dict[str, Any]:
    """Alfred-compatible document with one non-selectable error item."""
    message = str(error) or error.__class__.__name__
    return {
        "items": [
            {
                "uid": ERROR_UID,
                "title": ERROR_TITLE,
                "subtitle": message,
                "valid": False,
            }
        ]
    }


def write_document(document: Dict[str, Any], stream: Optional[TextIO] = None) -> None:
    target = stream if stream is not None else sys.stdout
    target.write(json.dumps(document, indent=2, ensure_ascii=False))
    target.write("\n")
    target.flush()


def render(collection: MenuCollection, stream: Optional[TextIO] = None) -> None:
    write_document(collection.to_alfred(), stream)


def render_or_error(
    build: Callable[[], MenuCollection],
    stream: Optional[TextIO] = None,
) -> int:
    """Run one generation pass and print its result.

    This is the only place generation errors are caught. Returns the process
    exit code: 0 when a full collection was printed, 1 when the error
    document was printed instead.
    """
    try:
        collection = build()
    except AWError as exc:
        logger.error("Menu generation failed: %s", error_to_payload(exc))
        write_document(error_document(exc), stream)
        return 1
    except Exception as exc:
        logger.exception("Unexpected failure during menu generation")
        write_document(error_document(exc), stream)
        return 1
    render(collection, stream)
    return 0
