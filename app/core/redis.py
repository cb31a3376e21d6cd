import os
import json
import redis
from redis.exceptions import RedisError
from dotenv import load_dotenv

from app.core.logging_config import get_logger

load_dotenv()

logger = get_logger()

CHANGES_CHANNEL = os.getenv("REDIS_CHANGES_CHANNEL", "padelist:bookings:changes")

_redis_client = None


def get_redis_client():
    global _redis_client

    if _redis_client is not None:
        return _redis_client

    redis_url = os.getenv("REDIS_URL")

    if not redis_url:
        return None

    try:
        client = redis.Redis.from_url(
            redis_url,
            decode_responses=True,
            socket_connect_timeout=2,
            socket_timeout=2,
        )
        client.ping()
        logger.info("Redis connected")
        _redis_client = client
        return _redis_client
    except RedisError as e:
        logger.warning(f"Redis unavailable: {e}")
        return None


def publish_change(payload: dict) -> bool:
    client = get_redis_client()
    if not client:
        return False
    try:
        client.publish(CHANGES_CHANNEL, json.dumps(payload))
        return True
    except RedisError as e:
        logger.warning(f"Redis publish failed: {e}")
        return False


def start_change_listener(handler):
    """
    Run handler(payload) for every message on the changes channel.

    Returns the redis-py worker thread (call .stop() on shutdown), or None
    when Redis is not configured.
    """
    client = get_redis_client()
    if not client:
        return None

    def on_message(message):
        try:
            payload = json.loads(message["data"])
        except (TypeError, ValueError):
            logger.warning(f"Ignoring malformed change message: {message.get('data')!r}")
            return
        handler(payload)

    pubsub = client.pubsub(ignore_subscribe_messages=True)
    pubsub.subscribe(**{CHANGES_CHANNEL: on_message})
    return pubsub.run_in_thread(sleep_time=0.5, daemon=True)
