"""Locate and parse the checklist file at a workspace root."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional, Union

from checklist_reviewer.config import CHECKLIST_FILENAME
from checklist_reviewer.models import ChecklistDocument

logger = logging.getLogger(__name__)


def checklist_path(root: Union[str, Path]) -> Path:
    return Path(root) / CHECKLIST_FILENAME


def load_checklist(root: Union[str, Path]) -> Optional[ChecklistDocument]:
    """Load the checklist from the top level of ``root``.

    Returns None when the file is absent, unreadable, not JSON, or not shaped
    like a checklist. Callers treat all of these as "no usable checklist";
    nothing is raised past this function.
    """
    path = checklist_path(root)
    if not path.is_file():
        logger.info("No checklist at %s", path)
        return None

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        checklist = ChecklistDocument.from_dict(data)
    except (OSError, ValueError) as e:
        logger.error("Error reading checklist %s: %s", path, e)
        return None
    except (KeyError, TypeError, AttributeError) as e:
        logger.error("Checklist %s has an unexpected shape: %r", path, e)
        return None

    logger.debug(
        "Loaded checklist %s: version=%s categories=%d items=%d",
        path,
        checklist.version,
        len(checklist.categories),
        len(checklist.item_ids()),
    )
    return checklist
