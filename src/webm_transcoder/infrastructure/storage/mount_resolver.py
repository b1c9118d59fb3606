"""Bucket mount detection."""

import os
from pathlib import Path
from typing import Optional

from ...domain.models import TransferMode, TransferPlan
from ...shared.logging import get_logger
from ...shared.types import PathLike


class MountResolver:
    """
    Decides whether a mounted view of the bucket can replace network transfer.
    Implements IMountResolver protocol.

    Every probe is a point-in-time check. A probe error counts as "absent",
    so a broken mount only ever sends the pipeline down the remote path.
    """

    def __init__(
        self,
        mount_name: Optional[str],
        result_prefix: str,
        mount_base: PathLike = "/function/storage"
    ):
        self.mount_name = mount_name
        self.result_prefix = result_prefix
        self.mount_base = Path(mount_base)
        self._logger = get_logger(__name__)

    @property
    def mount_root(self) -> Optional[Path]:
        if not self.mount_name:
            return None
        return self.mount_base / self.mount_name

    def resolve(self, object_id: str, result_name: str) -> Optional[TransferPlan]:
        """
        Return a mounted plan, or None when remote transfer is required.

        Args:
            object_id: Source object key
            result_name: Derived result file name (without prefix)

        Returns:
            TransferPlan in MOUNTED mode, or None
        """
        root = self.mount_root
        if root is None:
            return None

        if not self._probe(root, directory=True):
            self._logger.debug(f"Bucket mount {root} not available")
            return None

        input_path = self._under_root(root, object_id)
        if input_path is None:
            self._logger.warning(f"{object_id} escapes bucket mount {root}, using remote transfer")
            return None
        if not self._probe(input_path, directory=False):
            self._logger.debug(f"{object_id} not present in bucket mount {root}")
            return None

        output_path = self._under_root(root, f"{self.result_prefix}{result_name}")
        if output_path is None:
            self._logger.warning(f"Result path for {object_id} escapes bucket mount {root}, using remote transfer")
            return None

        return TransferPlan(
            mode=TransferMode.MOUNTED,
            input_path=input_path,
            output_path=output_path,
        )

    def _probe(self, path: Path, directory: bool) -> bool:
        try:
            return path.is_dir() if directory else path.exists()
        except OSError as e:
            self._logger.debug(f"Probe of {path} failed: {e}")
            return False

    @staticmethod
    def _under_root(root: Path, relative: str) -> Optional[Path]:
        # Keys are joined as strings so a leading "/" stays inside the mount
        path = Path(os.path.normpath(f"{root}/{relative}"))
        if path == root or root not in path.parents:
            return None
        return path
