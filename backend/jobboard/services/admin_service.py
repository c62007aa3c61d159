import logging
import secrets
import time

from sqlalchemy import text
from sqlalchemy.orm import Session

from jobboard.config import settings
from jobboard.errors import AuthenticationFailed, ServiceNotConfigured, TooManyAttempts, store_errors
from jobboard.utils.security import generate_token, verify_password

logger = logging.getLogger(__name__)


class AdminService:
    def __init__(self):
        self._active_tokens: dict[str, float] = {}  # token -> expires_at

    def _cleanup_expired(self):
        now = time.time()
        self._active_tokens = {
            t: exp for t, exp in self._active_tokens.items() if exp > now
        }

    @property
    def is_configured(self) -> bool:
        return bool(settings.admin_password_hash)

    def login(self, db: Session, username: str, password: str, throttle_key: str = "login") -> dict:
        if not self.is_configured:
            raise ServiceNotConfigured("Admin login is not configured")

        delay = self._get_throttle_delay(db, throttle_key)
        if delay > 0:
            raise TooManyAttempts(delay, f"Too many failed attempts, retry in {int(delay) + 1} seconds")

        username_ok = secrets.compare_digest(username.encode(), settings.admin_username.encode())
        password_ok = verify_password(settings.admin_password_hash, password)
        if not (username_ok and password_ok):
            self._record_failed_attempt(db, throttle_key)
            logger.warning("Failed admin login (%s)", throttle_key)
            raise AuthenticationFailed("Invalid admin credentials")

        self._reset_failed_attempts(db, throttle_key)
        token = generate_token()
        self._active_tokens[token] = time.time() + settings.admin_token_ttl_seconds
        logger.info("Admin session started (%s)", throttle_key)
        return {"token": token, "expires_in_seconds": settings.admin_token_ttl_seconds}

    def logout(self, token: str):
        self._active_tokens.pop(token, None)

    def logout_all(self):
        self._active_tokens.clear()

    def validate_token(self, token: str) -> bool:
        self._cleanup_expired()
        return token in self._active_tokens

    def touch(self, token: str):
        """Slide a live token's expiry forward."""
        if token in self._active_tokens:
            self._active_tokens[token] = time.time() + settings.admin_token_ttl_seconds

    def _get_throttle_delay(self, db: Session, key: str) -> float:
        with store_errors("Failed to read login throttle", db):
            row = db.execute(
                text("SELECT failed_attempts, last_failed_at FROM auth_throttle WHERE key = :key"),
                {"key": key},
            ).fetchone()
        if not row:
            return 0
        failed_attempts = int(row[0])
        last_failed_at = float(row[1])

        if failed_attempts < 3:
            return 0
        if failed_attempts < 5:
            delay = 5.0
        elif failed_attempts < 10:
            delay = 30.0
        else:
            delay = 300.0
        remaining = delay - (time.time() - last_failed_at)
        return max(0, remaining)

    def _record_failed_attempt(self, db: Session, key: str):
        with store_errors("Failed to record login attempt", db):
            db.execute(
                text(
                    """
                    INSERT INTO auth_throttle (key, failed_attempts, last_failed_at)
                    VALUES (:key, 1, :now)
                    ON CONFLICT(key) DO UPDATE SET
                        failed_attempts = failed_attempts + 1,
                        last_failed_at = :now
                    """
                ),
                {"key": key, "now": time.time()},
            )
            db.commit()

    def _reset_failed_attempts(self, db: Session, key: str):
        with store_errors("Failed to reset login throttle", db):
            db.execute(
                text(
                    """
                    INSERT INTO auth_throttle (key, failed_attempts, last_failed_at)
                    VALUES (:key, 0, :now)
                    ON CONFLICT(key) DO UPDATE SET
                        failed_attempts = 0,
                        last_failed_at = :now
                    """
                ),
                {"key": key, "now": time.time()},
            )
            db.commit()


admin_service = AdminService()
