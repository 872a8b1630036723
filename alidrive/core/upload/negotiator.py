"""
Upload negotiator.

Runs the create-upload handshake that decides whether bytes must be sent:

    PREHASH_PENDING --(accepted)----------> RAPID_CONFIRMED / TRANSFER_REQUIRED
                    --(PreHashMatched)----> HASH_CHALLENGE_ISSUED
    HASH_CHALLENGE_ISSUED --(confirmed)---> RAPID_CONFIRMED_2
                          --(otherwise)---> TRANSFER_REQUIRED

With rapid upload disabled the pre-hash round-trip is skipped and the
full-hash phase runs directly.
"""
from typing import Optional
import logging

from .models import (
    UploadRequest,
    UploadSession,
    CreateUploadResponse,
    NegotiationPayload,
    NegotiationState,
    NegotiationOutcome,
    PreHashPayload,
    FullHashPayload,
    PREHASH_SIZE,
)
from .protocols import DriveAPIProtocol
from .services import HashSampler, SpillFile
from ..api.errors import DriveAPIError, APIErrorCodes
from ..crypto import ProofCodeCalculator, PROOF_VERSION
from ..exceptions import ChallengeSignal, ProtocolMismatchError

logger = logging.getLogger('alidrive.upload.negotiator')


class UploadNegotiator:
    """
    Negotiates an upload with the server.

    Uses dependency injection for the sampler and proof calculator so each
    phase can be tested on its own.
    """

    def __init__(
        self,
        api_client: DriveAPIProtocol,
        rapid_upload: bool = True,
        sampler: Optional[HashSampler] = None,
        proof_calculator: Optional[ProofCodeCalculator] = None
    ):
        """
        Initialize negotiator.

        Args:
            api_client: Client providing ``create_upload`` and ``access_token``
            rapid_upload: Whether to try the pre-hash phase first
            sampler: Pre-hash sampler
            proof_calculator: Proof code calculator
        """
        self._api = api_client
        self._rapid_upload = rapid_upload
        self._sampler = sampler or HashSampler(PREHASH_SIZE)
        self._proof = proof_calculator or ProofCodeCalculator()
        self.state = NegotiationState.PREHASH_PENDING

    async def negotiate(
        self,
        request: UploadRequest,
        stream,
        spill: SpillFile
    ) -> NegotiationOutcome:
        """
        Run the handshake.

        Args:
            request: Upload metadata
            stream: Async readable with the file content
            spill: Temp store owned by the caller; filled only in the full-hash phase

        Returns:
            Outcome telling whether and from where to transfer

        Raises:
            DriveAPIError: For any server error other than the challenge
            TransportError: For network failures
            LocalIOError: If the temp store fails
            ProtocolMismatchError: If a transfer is required without a session
        """
        self.state = NegotiationState.PREHASH_PENDING
        challenged: Optional[CreateUploadResponse] = None

        if self._rapid_upload:
            sample = await self._sampler.sample(stream)
            stream = sample.stream
            logger.info(f"Submitting pre-hash for {request.name} ({request.size} bytes)")

            try:
                response = await self._submit(request, PreHashPayload(sample.pre_hash))
            except ChallengeSignal as signal:
                logger.info(f"Pre-hash matched for {request.name}, proving full possession")
                self.state = NegotiationState.HASH_CHALLENGE_ISSUED
                challenged = CreateUploadResponse.from_dict(signal.payload)
            else:
                if response.rapid_upload:
                    self.state = NegotiationState.RAPID_CONFIRMED
                    logger.info(f"Rapid upload confirmed for {request.name}")
                    return NegotiationOutcome(self.state, response, session=response.session)
                self.state = NegotiationState.TRANSFER_REQUIRED
                return self._transfer(response, stream)

        return await self._prove(request, stream, spill, challenged)

    async def _prove(
        self,
        request: UploadRequest,
        stream,
        spill: SpillFile,
        previous: Optional[CreateUploadResponse]
    ) -> NegotiationOutcome:
        """Full-hash phase: spill, hash, prove, resubmit."""
        hasher = await spill.absorb(stream)
        content_hash = hasher.hexdigest()
        if hasher.length != request.size:
            logger.warning(
                f"Stream yielded {hasher.length} bytes but {request.size} were declared"
            )

        proof = await self._proof.compute(self._api.access_token or '', request.size, spill)
        logger.debug(f"Proof window at offset {proof.offset} ({len(proof.data)} bytes)")

        payload = FullHashPayload(
            content_hash=content_hash,
            proof_code=proof.encoded,
            proof_version=PROOF_VERSION
        )

        try:
            response = await self._submit(request, payload)
        except ChallengeSignal as signal:
            logger.info(f"Full hash not accepted for {request.name}, transfer required")
            response = CreateUploadResponse.from_dict(signal.payload)
        else:
            if response.rapid_upload:
                self.state = NegotiationState.RAPID_CONFIRMED_2
                logger.info(f"Rapid upload confirmed for {request.name}")
                return NegotiationOutcome(self.state, response, session=response.session)

        self.state = NegotiationState.TRANSFER_REQUIRED
        if response.session is None and previous is not None and previous.session is not None:
            response = CreateUploadResponse(
                file_id=previous.file_id,
                upload_id=previous.upload_id,
                part_info_list=response.part_info_list or previous.part_info_list,
                rapid_upload=False,
                raw=response.raw
            )

        await spill.rewind()
        return self._transfer(response, spill)

    def _transfer(self, response: CreateUploadResponse, source) -> NegotiationOutcome:
        session: Optional[UploadSession] = response.session
        if session is None:
            raise ProtocolMismatchError(
                "Negotiation did not allocate an upload session",
                payload=response.raw
            )
        logger.info(f"Transfer required: {len(response.part_info_list)} parts into {session.file_id}")
        return NegotiationOutcome(
            NegotiationState.TRANSFER_REQUIRED,
            response,
            session=session,
            part_info_list=response.part_info_list,
            source=source
        )

    async def _submit(
        self,
        request: UploadRequest,
        payload: NegotiationPayload
    ) -> CreateUploadResponse:
        """Send one create-upload request; challenge codes become ChallengeSignal."""
        try:
            result = await self._api.create_upload(request.to_body(payload))
        except DriveAPIError as e:
            if APIErrorCodes.is_challenge(e.code):
                raise ChallengeSignal(e.code, e.payload) from e
            logger.error(f"Create upload failed for {request.name}: {e}")
            raise
        return CreateUploadResponse.from_dict(result)
