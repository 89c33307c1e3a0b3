"""Named commands the desktop shell invokes against the store.

Every result crossing this boundary is plain data and every failure is a
``CommandError`` carrying human-readable text only.
"""

from .constants import COLLECTIONS
from .errors import StoreError


class CommandError(Exception):
    pass


def _load(collection):
    def handler(store, args):
        return store.load(collection)

    return handler


def _save(collection):
    def handler(store, args):
        data = (args or {}).get("data")
        if data is None:
            raise CommandError(f"save_{collection} requires a 'data' argument")
        if not isinstance(data, str):
            raise CommandError(f"save_{collection} expects 'data' to be a string")
        store.save(collection, data)
        return None

    return handler


def _database_size(store, args):
    return store.get_database_size()


COMMANDS = {}
for _name in COLLECTIONS:
    COMMANDS[f"load_{_name}"] = _load(_name)
    COMMANDS[f"save_{_name}"] = _save(_name)
COMMANDS["get_database_size"] = _database_size
del _name


def invoke(store, command, args=None):
    handler = COMMANDS.get(command)
    if handler is None:
        raise CommandError(f"unknown command: {command}")
    if args is not None and not isinstance(args, dict):
        raise CommandError("command arguments must be an object")
    try:
        return handler(store, args)
    except StoreError as exc:
        raise CommandError(str(exc)) from exc
