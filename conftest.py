from __future__ import annotations

import tinct.cache

from sybil import Sybil
from sybil.parsers.codeblock import PythonCodeBlockParser
from sybil.parsers.doctest import DocTestParser
from sybil.parsers.rest import SkipParser

_ORIG_REGISTRY: list[tinct.cache.CacheRegistry] = []


def _setup(*_args, **_kwargs):
    _ORIG_REGISTRY.append(tinct.cache.set_registry(tinct.cache.CacheRegistry()))


def _teardown(*_args, **_kwargs):
    tinct.cache.set_registry(_ORIG_REGISTRY.pop())


pytest_collect_file = Sybil(
    parsers=[
        DocTestParser(),
        PythonCodeBlockParser(),
        SkipParser(),
    ],
    patterns=["*.py"],
    excludes=["tinct/_version.py", "test/*", "examples/*"],
    setup=_setup,
    teardown=_teardown,
).pytest()
