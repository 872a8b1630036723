"""
Upload completion service.
"""
from typing import Any, Dict
import logging

from ..models import UploadSession
from ..protocols import DriveAPIProtocol
from ...exceptions import ProtocolMismatchError


class SessionFinalizer:
    """
    Commits an upload session.

    The commit only counts if the server echoes the negotiated file id.
    """

    def __init__(self, api_client: DriveAPIProtocol):
        self._api = api_client
        self._logger = logging.getLogger('alidrive.upload.finalize')

    async def finalize(self, drive_id: str, session: UploadSession) -> Dict[str, Any]:
        """
        Complete an upload.

        Args:
            drive_id: Drive holding the file
            session: Session allocated during negotiation

        Returns:
            Raw completion response

        Raises:
            ProtocolMismatchError: If the response file id differs or is missing
        """
        self._logger.debug(f"Completing upload {session.upload_id} for file {session.file_id}")
        response: Any = await self._api.complete_upload(
            drive_id,
            session.file_id,
            session.upload_id
        )

        file_id = response.get('file_id') if isinstance(response, dict) else None
        if file_id != session.file_id:
            self._logger.error(f"Completion returned file id {file_id!r}, expected {session.file_id!r}")
            raise ProtocolMismatchError(
                "Upload completion did not confirm the file",
                payload=response,
                expected_file_id=session.file_id
            )

        self._logger.info(f"Upload completed: {file_id}")
        return response
