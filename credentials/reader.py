import json
import logging
import os
from typing import Any, Dict, Tuple
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

# Non-secret fields that are safe to show next to the encoded key
GCP_DETAIL_FIELDS = ("project_id", "client_email", "private_key_id")
AZURE_DETAIL_FIELDS = ("tenantId", "subscriptionId", "clientId")


class CredentialFileError(Exception):
    pass


class CredentialPayload(BaseModel):
    raw: bytes
    kind: str = "binary"  # gcp_service_account | azure_service_principal | json | binary
    details: Dict[str, str] = Field(default_factory=dict)


def read_credential_file(path: str) -> bytes:
    if not os.path.exists(path):
        raise CredentialFileError(f"{path} not found")
    try:
        with open(path, "rb") as f:
            return f.read()
    except OSError as e:
        raise CredentialFileError(f"Could not read {path}: {e}") from e


def _detect(data: Any) -> Tuple[str, Dict[str, str]]:
    if not isinstance(data, dict):
        return "json", {}
    if data.get("type") == "service_account":
        fields = GCP_DETAIL_FIELDS
        kind = "gcp_service_account"
    elif "tenantId" in data and "clientId" in data:
        fields = AZURE_DETAIL_FIELDS
        kind = "azure_service_principal"
    else:
        return "json", {}
    return kind, {k: str(data[k]) for k in fields if data.get(k)}


def load_credentials(raw: bytes, compact: bool = True) -> CredentialPayload:
    """
    Build the payload to encode from raw credential bytes.

    With `compact`, the input must be JSON and is re-serialized without
    whitespace (non-ASCII kept as-is) so the encoded string stays short.
    Without it the bytes are encoded untouched.
    """
    if not raw:
        raise CredentialFileError("Credential input is empty")

    try:
        data = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        if compact:
            raise CredentialFileError(f"Could not decode JSON credentials: {e}") from e
        logger.debug("Input is not JSON, encoding raw bytes")
        return CredentialPayload(raw=raw)

    kind, details = _detect(data)
    if compact:
        raw = json.dumps(data, separators=(",", ":"), ensure_ascii=False).encode("utf-8")
    return CredentialPayload(raw=raw, kind=kind, details=details)
