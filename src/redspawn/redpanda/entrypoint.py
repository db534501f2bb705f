"""Side files mounted into the container at creation time."""

import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path

from redspawn.errors import SideFileError
from redspawn.models.settings import RedpandaSettings
from redspawn.redpanda.constants import SIDE_FILE_MODE
from redspawn.redpanda.rendering import render_bootstrap_config
from redspawn.utils.templates import read_packaged_file


logger = logging.getLogger(__name__)

ENTRYPOINT_SCRIPT = "entrypoint-tc.sh"


@dataclass
class SideFiles:
    """Temporary host files holding the entrypoint shim and bootstrap config."""
    entrypoint: Path
    bootstrap_config: Path

    def cleanup(self) -> None:
        """Remove both temporary files."""
        for path in (self.entrypoint, self.bootstrap_config):
            path.unlink(missing_ok=True)


def entrypoint_script() -> bytes:
    """Return the shim that waits for the node config before starting Redpanda."""
    return read_packaged_file(ENTRYPOINT_SCRIPT).encode("utf-8")


def _write_temp_file(content: bytes, suffix: str) -> Path:
    fd, name = tempfile.mkstemp(prefix="redspawn-", suffix=suffix)
    path = Path(name)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(content)
        os.chmod(path, SIDE_FILE_MODE)
    except OSError:
        path.unlink(missing_ok=True)
        raise
    return path


def materialize_side_files(settings: RedpandaSettings) -> SideFiles:
    """Write the entrypoint shim and the bootstrap config to temporary files.

    The shim lets the container run before Redpanda starts: it blocks until
    the node config, which needs the mapped Kafka port, has been injected.
    """
    bootstrap_config = render_bootstrap_config(settings)

    try:
        entrypoint_file = _write_temp_file(entrypoint_script(), ".sh")
    except OSError as e:
        raise SideFileError(f"Failed to create entrypoint file: {e}") from e

    try:
        bootstrap_file = _write_temp_file(bootstrap_config, ".yaml")
    except OSError as e:
        entrypoint_file.unlink(missing_ok=True)
        raise SideFileError(f"Failed to create bootstrap config file: {e}") from e

    logger.debug(f"Wrote side files {entrypoint_file} and {bootstrap_file}")
    return SideFiles(entrypoint=entrypoint_file, bootstrap_config=bootstrap_file)
