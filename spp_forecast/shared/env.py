"""Resolve ``*_FILE`` environment variables into their secret values.

ERCOT credentials (``ERCOT_USERNAME``, ``ERCOT_PASSWORD``,
``ERCOT_SUBSCRIPTION_KEY``) are usually mounted as Docker secrets; setting
``ERCOT_PASSWORD_FILE=/run/secrets/ercot_password`` exposes the file content
as ``ERCOT_PASSWORD`` before the settings are loaded.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import List, MutableMapping, Optional

logger = logging.getLogger(__name__)

SECRET_FILE_SUFFIX = "_FILE"


def load_secret_file_variables(
    environ: Optional[MutableMapping[str, str]] = None,
) -> List[str]:
    """
    Populate ``KEY`` from the file referenced by ``KEY_FILE``.

    Variables that are already set win over their file counterpart. Failures
    to read a file are logged and skipped.

    Returns:
        The names of the variables that were populated.
    """
    env = os.environ if environ is None else environ
    resolved: List[str] = []

    for key, file_path in list(env.items()):
        if not key.endswith(SECRET_FILE_SUFFIX):
            continue
        target_key = key[: -len(SECRET_FILE_SUFFIX)]
        if not target_key or env.get(target_key) or not file_path:
            continue
        try:
            env[target_key] = Path(file_path).read_text(encoding="utf-8").strip()
        except FileNotFoundError as exc:
            logger.warning(
                "env.secret_file.missing",
                extra={"key": key, "path": file_path, "error": str(exc)},
            )
            continue
        except UnicodeDecodeError as exc:
            logger.warning(
                "env.secret_file.decode_failed",
                extra={"key": key, "path": file_path, "error": str(exc)},
            )
            continue
        except OSError as exc:
            logger.warning(
                "env.secret_file.load_failed",
                extra={"key": key, "path": file_path, "error": str(exc)},
            )
            continue
        resolved.append(target_key)

    return resolved


load_secret_file_variables()
