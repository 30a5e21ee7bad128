from functools import lru_cache

from django.conf import settings

from .compiler import Compiler
from .types import types_from_config

DEFAULTS = {
    "INCLUDE_TYPE_NAMES": False,
    "EXTRA_BLOCK_TYPES": [],
    "EXTRA_MARKUP_TYPES": [],
    "ASYNC_RENDER": False,
}


def get_compiler_config():
    """
    Configuration for the content compiler.

    Values come from the ``CONTENT_KIT`` dict in Django settings, merged over
    ``DEFAULTS``:

    - INCLUDE_TYPE_NAMES: add ``type_name`` to parsed blocks and markups
    - EXTRA_BLOCK_TYPES / EXTRA_MARKUP_TYPES: ``[{"tag": ..., "name": ...}]``
      registered after the built-in types
    - ASYNC_RENDER: rebuild cached document HTML in a Celery task on save
    """
    config = dict(DEFAULTS)
    config.update(getattr(settings, "CONTENT_KIT", {}) or {})
    return config


@lru_cache(maxsize=1)
def get_default_compiler() -> Compiler:
    """Build the compiler shared by the Django layer, once per process."""
    config = get_compiler_config()
    compiler = Compiler(include_type_names=bool(config["INCLUDE_TYPE_NAMES"]))
    for type_ in types_from_config(config["EXTRA_BLOCK_TYPES"]):
        compiler.register_block_type(type_)
    for type_ in types_from_config(config["EXTRA_MARKUP_TYPES"]):
        compiler.register_markup_type(type_)
    return compiler
