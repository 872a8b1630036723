"""
Upload coordinator.

Orchestrates the upload process using injected dependencies.
"""
import logging
import time
from typing import Any, Optional

from .models import UploadConfig, UploadRequest, UploadResult
from .negotiator import UploadNegotiator
from .protocols import DriveAPIProtocol, ProgressCallback
from .strategies import FixedSizePartStrategy, BasePartStrategy
from .services import (
    HashSampler,
    SpillFile,
    UploadSource,
    ChunkedTransferExecutor,
    SessionFinalizer,
)

logger = logging.getLogger('alidrive.upload.coordinator')


class UploadCoordinator:
    """
    Coordinates the file upload process.

    Uses dependency injection for all components, making it:
    - Testable (mock the API client)
    - Extensible (swap the part strategy)

    Each ``upload()`` call owns its own request, session and temp file.
    """

    def __init__(
        self,
        api_client: DriveAPIProtocol,
        drive_id: str,
        config: Optional[UploadConfig] = None,
        part_strategy: Optional[BasePartStrategy] = None
    ):
        """
        Initialize upload coordinator.

        Args:
            api_client: AliDrive API client
            drive_id: Target drive
            config: Upload configuration
            part_strategy: Strategy for splitting the file into parts
        """
        self._api = api_client
        self._drive_id = drive_id
        self._config = config or UploadConfig()
        self._parts = part_strategy or FixedSizePartStrategy(self._config.part_size)

    @property
    def config(self) -> UploadConfig:
        return self._config

    async def upload(
        self,
        source: Any,
        parent_id: str = 'root',
        name: Optional[str] = None,
        size: Optional[int] = None,
        progress_callback: Optional[ProgressCallback] = None,
        rapid_upload: Optional[bool] = None
    ) -> UploadResult:
        """
        Execute the complete upload process.

        Args:
            source: Path, bytes, or async readable
            parent_id: Parent folder id
            name: File name (defaults to the path name)
            size: Declared size (required for streams)
            progress_callback: Called with percent after each part
            rapid_upload: Override ``config.rapid_upload`` for this call

        Returns:
            Upload result

        Raises:
            DriveAPIError: If the server rejects a request
            TransportError: If a request cannot be completed
            ProtocolMismatchError: If completion does not confirm the file
            LocalIOError: If the temp file cannot be used
        """
        use_rapid = self._config.rapid_upload if rapid_upload is None else rapid_upload

        async with UploadSource(source, name=name, size=size) as src:
            size_mb = src.size / (1024 * 1024)
            logger.info(f"Starting upload: {src.name} ({size_mb:.2f} MB, rapid={use_rapid})")
            start = time.time()

            request = UploadRequest(
                drive_id=self._drive_id,
                name=src.name,
                parent_id=parent_id,
                size=src.size,
                part_info_list=self._parts.part_info_list(src.size),
                check_name_mode=self._config.check_name_mode
            )

            negotiator = UploadNegotiator(
                self._api,
                rapid_upload=use_rapid,
                sampler=HashSampler(self._config.prehash_size)
            )

            async with SpillFile(self._config.temp_dir) as spill:
                outcome = await negotiator.negotiate(request, src.stream, spill)

                if outcome.is_rapid:
                    logger.info(f"Rapid upload finished in {time.time() - start:.2f}s: {src.name}")
                    return UploadResult(
                        file_id=outcome.response.file_id,
                        name=src.name,
                        size=src.size,
                        rapid_upload=True,
                        response=outcome.response.raw
                    )

                executor = ChunkedTransferExecutor(self._api, self._config.part_size)
                uploaded = await executor.transfer(
                    outcome.part_info_list,
                    outcome.source,
                    request.part_count,
                    progress_callback
                )

            response = await SessionFinalizer(self._api).finalize(self._drive_id, outcome.session)

        logger.info(f"Upload finished in {time.time() - start:.2f}s: {src.name} ({uploaded} parts)")
        return UploadResult(
            file_id=outcome.session.file_id,
            name=src.name,
            size=src.size,
            rapid_upload=False,
            parts_uploaded=uploaded,
            response=response
        )
