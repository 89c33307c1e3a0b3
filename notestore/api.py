import asyncio
import json
import logging

from aiohttp import web

from .commands import COMMANDS, CommandError, invoke
from .db import DocumentStore
from .errors import StoreError
from .migration import migrate_legacy_storage
from .utils import format_bytes

logger = logging.getLogger("NoteStore")

STORE_KEY = web.AppKey("store", DocumentStore)

routes = web.RouteTableDef()


def _json_response(obj, status=200):
    return web.Response(
        status=status,
        text=json.dumps(obj, ensure_ascii=False),
        content_type="application/json",
    )


def _bad_request(msg):
    return _json_response({"error": msg}, status=400)


async def _read_json(request):
    if not request.can_read_body:
        return None
    return await request.json()


@routes.get("/notestore/health")
async def health(request):
    store = request.app[STORE_KEY]
    size = await asyncio.to_thread(store.get_database_size)
    version = await asyncio.to_thread(store.schema_version)
    return _json_response(
        {
            "ok": True,
            "db_path": store.db_path,
            "schema_version": version,
            "size_bytes": size,
            "size_human": format_bytes(size),
        }
    )


@routes.post("/notestore/invoke/{command}")
async def invoke_command(request):
    store = request.app[STORE_KEY]
    command = request.match_info["command"]
    if command not in COMMANDS:
        return _json_response({"error": f"unknown command: {command}"}, status=404)
    try:
        args = await _read_json(request)
    except json.JSONDecodeError:
        return _bad_request("request body is not valid JSON")
    try:
        result = await asyncio.to_thread(invoke, store, command, args)
    except CommandError as exc:
        logger.warning("command %s failed: %s", command, exc)
        return _bad_request(str(exc))
    return _json_response({"result": result})


@routes.post("/notestore/migrate/legacy")
async def migrate_legacy(request):
    store = request.app[STORE_KEY]
    try:
        payload = await _read_json(request)
    except json.JSONDecodeError:
        return _bad_request("request body is not valid JSON")
    if not isinstance(payload, dict):
        return _bad_request("request body must be a JSON object")
    try:
        result = await asyncio.to_thread(migrate_legacy_storage, store, payload)
    except StoreError as exc:
        logger.warning("legacy import failed: %s", exc)
        return _json_response({"error": str(exc)}, status=500)
    return _json_response(result.to_dict())


async def _close_store(app):
    await asyncio.to_thread(app[STORE_KEY].close)


def create_app(store):
    app = web.Application()
    app[STORE_KEY] = store
    app.add_routes(routes)
    app.on_cleanup.append(_close_store)
    return app
