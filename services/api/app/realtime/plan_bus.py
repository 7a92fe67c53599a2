import json
import logging

from redis.exceptions import RedisError

from app.infra.redis_client import get_sync_redis, redis_key

logger = logging.getLogger("pantryplan.realtime")


def plan_channel() -> str:
    return redis_key("plan")


def publish_plan_updated_sync(day_iso: str, recipe_id: str | None) -> None:
    """Tell listeners the plan changed so they pull fresh lists.

    Delivery is best effort; a plan write never fails because the bus is down.
    """
    payload = {"type": "plan_updated", "date": day_iso, "recipe_id": recipe_id}
    try:
        get_sync_redis().publish(plan_channel(), json.dumps(payload))
    except RedisError as e:
        logger.warning("Could not publish plan update for %s: %s", day_iso, e)
