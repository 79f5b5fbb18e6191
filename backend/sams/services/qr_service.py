"""QR token issuing and verification."""
import base64
import io
import json
import logging
import secrets
import threading
from datetime import datetime, timedelta
from typing import Callable, Dict, Optional, Tuple

import qrcode
import redis

from sams.utils.exceptions import NotFoundError

logger = logging.getLogger(__name__)

DEFAULT_TOKEN_LIFETIME = timedelta(minutes=5)

TokenEntry = Tuple[int, datetime]


class MemoryTokenStore:
    """Process-local token map.

    Only valid for a single server process; use RedisTokenStore when
    several workers must see the same tokens.
    """

    def __init__(self):
        self._tokens: Dict[str, TokenEntry] = {}
        self._lock = threading.Lock()

    def put(self, token: str, user_id: int, expires_at: datetime, ttl: timedelta) -> None:
        with self._lock:
            self._tokens[token] = (user_id, expires_at)

    def get(self, token: str) -> Optional[TokenEntry]:
        with self._lock:
            return self._tokens.get(token)

    def delete(self, token: str) -> None:
        with self._lock:
            self._tokens.pop(token, None)

    def sweep(self, now: datetime) -> int:
        """Drop every entry expired at ``now``; returns how many went."""
        with self._lock:
            expired = [token for token, (_, expires_at) in self._tokens.items() if expires_at <= now]
            for token in expired:
                del self._tokens[token]
            return len(expired)

    def __contains__(self, token: str) -> bool:
        with self._lock:
            return token in self._tokens

    def __len__(self) -> int:
        with self._lock:
            return len(self._tokens)


class RedisTokenStore:
    """Token map shared through Redis; key TTLs do the eviction."""

    def __init__(self, client, prefix: str = 'sams:qr:'):
        self.client = client
        self.prefix = prefix

    def _key(self, token: str) -> str:
        return f'{self.prefix}{token}'

    def put(self, token: str, user_id: int, expires_at: datetime, ttl: timedelta) -> None:
        payload = json.dumps({'user_id': user_id, 'expires_at': expires_at.isoformat()})
        self.client.set(self._key(token), payload, ex=max(int(ttl.total_seconds()), 1))

    def get(self, token: str) -> Optional[TokenEntry]:
        raw = self.client.get(self._key(token))
        if raw is None:
            return None
        data = json.loads(raw)
        return data['user_id'], datetime.fromisoformat(data['expires_at'])

    def delete(self, token: str) -> None:
        self.client.delete(self._key(token))

    def sweep(self, now: datetime) -> int:
        return 0


class QRTokenService:
    """Issues short-lived opaque tokens that resolve a scanned code to a user.

    Tokens stay valid for repeated scans until they expire; ``verify`` does
    not consume them.
    """

    def __init__(
        self,
        store,
        user_exists: Callable[[int], bool],
        lifetime: timedelta = DEFAULT_TOKEN_LIFETIME,
        clock: Callable[[], datetime] = datetime.utcnow
    ):
        self.store = store
        self.user_exists = user_exists
        self.lifetime = lifetime
        self.clock = clock

    def issue(self, user_id: int) -> str:
        """Create a token for an existing user.

        Raises NotFoundError, storing nothing, when the user is unknown.
        """
        if not self.user_exists(user_id):
            raise NotFoundError("User not found")

        token = secrets.token_hex(16)
        now = self.clock()
        self.store.put(token, user_id, now + self.lifetime, self.lifetime)

        swept = self.store.sweep(now)
        if swept:
            logger.debug("Swept %d expired QR tokens", swept)

        return token

    def verify(self, token: str) -> Optional[int]:
        """Return the token's user id, or None when unknown or expired."""
        entry = self.store.get(token)

        if entry is None:
            return None

        user_id, expires_at = entry
        if expires_at <= self.clock():
            self.store.delete(token)
            return None

        return user_id

    @staticmethod
    def render_qr_png(token: str) -> str:
        """Render the token as a base64 PNG data URI."""
        qr = qrcode.QRCode(
            version=None,  # Auto-determine size
            error_correction=qrcode.constants.ERROR_CORRECT_M,
            box_size=10,
            border=4,
        )
        qr.add_data(token)
        qr.make(fit=True)

        img = qr.make_image(fill_color="black", back_color="white")

        buffered = io.BytesIO()
        img.save(buffered, format="PNG")
        img_str = base64.b64encode(buffered.getvalue()).decode()

        return f"data:image/png;base64,{img_str}"


def create_token_store(app):
    """Build the token store selected by ``QR_TOKEN_STORE``."""
    kind = app.config.get('QR_TOKEN_STORE', 'memory')

    if kind == 'redis':
        redis_url = app.config.get('REDIS_URL')
        if not redis_url:
            raise RuntimeError("QR_TOKEN_STORE is 'redis' but REDIS_URL is not set")
        return RedisTokenStore(redis.Redis.from_url(redis_url, decode_responses=True))

    if kind != 'memory':
        raise RuntimeError(f"Unknown QR_TOKEN_STORE: {kind}")

    return MemoryTokenStore()
