import asyncio
import functools
import json
import logging
import sys
from typing import Any

from firebase_admin import initialize_app
from firebase_functions import https_fn, options, scheduler_fn
from firebase_functions.params import SecretParam

from rotation_watch.config import MAX_INSTANCES, POLL_SCHEDULE, POLL_TIMEZONE, RIOT_KEY_SECRET
from rotation_watch.proxy import require_attested_caller
from rotation_watch.services import (
    Services,
    build_services,
    run_callable_proxy,
    run_http_proxy,
    run_poll,
)

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%S",
    handlers=[logging.StreamHandler(sys.stdout)],
)
log = logging.getLogger("main")

RIOT_KEY = SecretParam(RIOT_KEY_SECRET)

options.set_global_options(max_instances=MAX_INSTANCES)


@functools.cache
def _services() -> Services:
    """Built on first use, then reused for the lifetime of the instance."""
    app = initialize_app()
    return build_services(app, read_secret=lambda: RIOT_KEY.value)


@https_fn.on_call(secrets=[RIOT_KEY])
def championRotationCallable(req: https_fn.CallableRequest) -> Any:
    require_attested_caller(req)
    return asyncio.run(run_callable_proxy(_services()))


@https_fn.on_request(secrets=[RIOT_KEY])
def championRotation(req: https_fn.Request) -> https_fn.Response:
    result = asyncio.run(run_http_proxy(_services(), req.method))
    return https_fn.Response(
        json.dumps(result.body),
        status=result.status,
        headers=result.headers,
        mimetype="application/json",
    )


@scheduler_fn.on_schedule(
    schedule=POLL_SCHEDULE,
    timezone=scheduler_fn.Timezone(POLL_TIMEZONE),
    secrets=[RIOT_KEY],
)
def pollChampionRotation(event: scheduler_fn.ScheduledEvent) -> None:
    log.info("Scheduled rotation poll at %s", event.schedule_time)
    asyncio.run(run_poll(_services()))
