import hashlib
from typing import Literal, Optional
from pydantic import BaseModel

from codec.alphabet import Alphabet, DEFAULT_ALPHABET
from codec.decoder import decode
from codec.encoder import encode
from codec.errors import DecodeError

DEFAULT_PREVIEW_BYTES = 200


class VerificationResult(BaseModel):
    ok: bool
    stage: Literal["Decoded", "Compared"]
    reason: str = ""
    digest_algorithm: str = "sha256"
    original_length: int
    decoded_length: Optional[int] = None
    original_digest: str
    decoded_digest: str = ""
    original_preview: str = ""
    decoded_preview: str = ""

    def diagnostic(self) -> str:
        """Human-readable bundle for operators inspecting a failed round trip."""
        decoded_len = self.decoded_length if self.decoded_length is not None else f"n/a ({self.reason})"
        lines = [
            f"Verification failed: {self.reason}",
            f"  Original length: {self.original_length} bytes",
            f"  Decoded length:  {decoded_len}",
            f"  Original {self.digest_algorithm}: {self.original_digest}",
            f"  Decoded {self.digest_algorithm}:  {self.decoded_digest or 'n/a'}",
            f"  Original preview: {self.original_preview}",
            f"  Decoded preview:  {self.decoded_preview or 'n/a'}",
        ]
        return "\n".join(lines)


def check_digest_algorithm(name: str) -> str:
    """Return the normalized hashlib name, or raise ValueError if it cannot be used."""
    normalized = str(name).lower()
    # shake_* digests need an explicit length
    if normalized not in hashlib.algorithms_available or normalized.startswith("shake_"):
        raise ValueError(f"Unsupported digest algorithm {name!r}")
    return normalized


def content_digest(data: bytes, algorithm: str = "sha256") -> str:
    return hashlib.new(algorithm, data).hexdigest()


def _preview(data: bytes, limit: int) -> str:
    text = data[:limit].decode("utf-8", errors="replace")
    if len(data) > limit:
        text += "..."
    return text


def verify_encoded(
    original: bytes,
    encoded: str,
    alphabet: Alphabet = DEFAULT_ALPHABET,
    digest_algorithm: str = "sha256",
    preview_bytes: int = DEFAULT_PREVIEW_BYTES,
) -> VerificationResult:
    """
    Decode `encoded` and compare its digest with the digest of `original`.
    Mismatches are returned, never raised.
    """
    original_digest = content_digest(original, digest_algorithm)
    base = dict(
        digest_algorithm=digest_algorithm,
        original_length=len(original),
        original_digest=original_digest,
    )

    try:
        decoded = decode(encoded, alphabet)
    except DecodeError as e:
        return VerificationResult(
            ok=False,
            stage="Decoded",
            reason=f"decode failed: {e}",
            original_preview=_preview(original, preview_bytes),
            **base,
        )

    decoded_digest = content_digest(decoded, digest_algorithm)
    if decoded_digest == original_digest:
        return VerificationResult(
            ok=True,
            stage="Compared",
            decoded_length=len(decoded),
            decoded_digest=decoded_digest,
            **base,
        )

    return VerificationResult(
        ok=False,
        stage="Compared",
        reason="digest mismatch",
        decoded_length=len(decoded),
        decoded_digest=decoded_digest,
        original_preview=_preview(original, preview_bytes),
        decoded_preview=_preview(decoded, preview_bytes),
        **base,
    )


def verify(
    original: bytes,
    alphabet: Alphabet = DEFAULT_ALPHABET,
    digest_algorithm: str = "sha256",
    preview_bytes: int = DEFAULT_PREVIEW_BYTES,
) -> VerificationResult:
    """Encode then decode `original` and report whether the round trip is exact."""
    encoded = encode(original, alphabet)
    return verify_encoded(original, encoded, alphabet, digest_algorithm, preview_bytes)
