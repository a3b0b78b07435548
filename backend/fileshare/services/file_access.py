"""Download authorization.

Both download routes (plain GET and the password resubmission POST) feed the
record and whatever password came with the request through resolve_access()
and act on the decision it returns.
"""
from enum import Enum
from typing import Optional

from fileshare.models.file_record import FileRecord
from fileshare.services.passwords import normalize_password, verify_password


class AccessDecision(str, Enum):
    AUTHORIZED = "authorized"
    PROMPT = "prompt"
    PROMPT_ERROR = "prompt_error"


async def resolve_access(record: FileRecord, supplied_password: Optional[str]) -> AccessDecision:
    """Decide whether `record` may be served for this request.

    - unprotected record: always AUTHORIZED
    - protected, no password supplied: PROMPT
    - protected, wrong password: PROMPT_ERROR
    - protected, matching password: AUTHORIZED
    """
    if not record.is_protected:
        return AccessDecision.AUTHORIZED

    supplied = normalize_password(supplied_password)
    if supplied is None:
        return AccessDecision.PROMPT

    if not await verify_password(supplied, record.password):
        return AccessDecision.PROMPT_ERROR
    return AccessDecision.AUTHORIZED
