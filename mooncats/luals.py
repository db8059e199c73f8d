"""Run lua-language-server to export definitions as doc.json."""

import logging
import os
import subprocess
import tempfile

from mooncats.domain.models import DEFAULT_LUALS_COMMAND
from mooncats.errors import LuaLSError
from mooncats.schema import Definition, load_definitions

logger = logging.getLogger(__name__)

DOC_JSON = 'doc.json'


def generate_json_docs(definitions_path: str, command: str = DEFAULT_LUALS_COMMAND) -> list[Definition]:
    """Export and load the definitions below ``definitions_path``.

    Args:
        definitions_path: Folder of LuaCATS files to document.
        command: The lua-language-server executable.

    Raises:
        LuaLSError: If the language server cannot be run or fails.
        SchemaError: If its output cannot be parsed.
    """
    with tempfile.TemporaryDirectory(prefix='luals-docs') as tmp_dir:
        args = [
            command,
            '--doc', str(definitions_path),
            '--doc_out_path', tmp_dir,
            '--logpath', tmp_dir,
        ]
        logger.debug("Running %s", ' '.join(args))

        try:
            result = subprocess.run(args, capture_output=True, text=True)
        except OSError as e:
            raise LuaLSError(f"Failed to run {command}: {e}") from e

        if result.returncode < 0:
            raise LuaLSError(f"LuaLS process terminated by signal {-result.returncode}")
        if result.returncode != 0:
            raise LuaLSError(
                f"LuaLS process exited with status code {result.returncode}: "
                f"{result.stderr.strip()}"
            )

        json_doc_path = os.path.join(tmp_dir, DOC_JSON)
        try:
            with open(json_doc_path, encoding='utf-8') as f:
                text = f.read()
        except OSError as e:
            raise LuaLSError(f"LuaLS did not write {DOC_JSON}: {e}") from e

    definitions = load_definitions(text)
    logger.info("Generated %d definitions from %s", len(definitions), definitions_path)
    return definitions
