"""
Admin console gate.

This is the shared-code prompt of the club console and nothing more: it is
NOT authentication. It only decides whether the admin views are shown. The
public cancel endpoint deletes bookings without it.
"""

import hmac
import os

from dotenv import load_dotenv
from fastapi import HTTPException

from app.core.logging_config import get_logger

load_dotenv()

logger = get_logger()

ADMIN_ACCESS_CODE = os.getenv("ADMIN_ACCESS_CODE", "padelist!!")


def check_admin_code(code) -> bool:
    if code is None:
        return False
    return hmac.compare_digest(code.encode(), ADMIN_ACCESS_CODE.encode())


def require_admin_code(code: str = None):
    if not check_admin_code(code):
        logger.bind(log_type="admin").warning("Admin console refused: incorrect code")
        raise HTTPException(status_code=401, detail="Code incorrect.")
    return True
