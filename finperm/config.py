from __future__ import annotations

import copy
import json
import logging
from pathlib import Path
from typing import Any, Optional, Union

logger = logging.getLogger(__name__)

DEFAULTS = {
    'validation': {
        'method': 'linear',
    },
    'enumeration': {
        'max_degree': 10,
    },
}

VALIDATION_METHODS = ('linear', 'quadratic')


def merge_tree(result: dict, updates: dict) -> dict:
    """Merge ``updates`` into ``result`` in place, recursing into sub dicts."""
    for key, value in updates.items():
        if not isinstance(value, dict):
            result[key] = value
            continue
        if not isinstance(result.get(key), dict):
            result[key] = {}
        merge_tree(result[key], value)
    return result


def query_tree(dct: dict, q: str) -> Any:
    node = dct
    path = []
    for key in q.split('.'):
        if not isinstance(node, dict):
            raise KeyError(f"Query {q} error, '{'.'.join(path)}' is "
                           f"{type(node).__name__}, not dict.")
        path.append(key)
        if key not in node:
            raise KeyError(
                f"Query {q} error, key '{'.'.join(path)}' not found.")
        node = node[key]
    return node


def set_tree(dct: dict, q: str, value: Any) -> None:
    *parents, leaf = q.split('.')
    node = dct
    for i, key in enumerate(parents):
        sub = node.setdefault(key, {})
        if not isinstance(sub, dict):
            raise ValueError(f"try to set {'.'.join(parents[:i + 1])} of "
                             f"type {type(sub).__name__} as a dict")
        node = sub
    if isinstance(node.get(leaf), dict) and not isinstance(value, dict):
        raise ValueError(f"try to set a dict {q} to {type(value).__name__}")
    node[leaf] = value


def _check(dct):
    method = query_tree(dct, 'validation.method')
    if method not in VALIDATION_METHODS:
        raise ValueError(f'validation.method must be one of '
                         f'{VALIDATION_METHODS}, not {method!r}')
    max_degree = query_tree(dct, 'enumeration.max_degree')
    if (not isinstance(max_degree, int) or isinstance(max_degree, bool)
            or max_degree < 0):
        raise ValueError('enumeration.max_degree must be a non-negative int, '
                         f'not {max_degree!r}')


class Config(dict):
    """Library settings as a tree of dicts.

    Keys are addressed with dotted paths, e.g.
    ``cfg.query('enumeration.max_degree')``. When a path is given, the
    settings stored there are merged over the defaults and ``commit``
    writes them back as JSON.
    """

    def __init__(self, path: Optional[Union[str, Path]] = None):
        super().__init__()
        merge_tree(self, copy.deepcopy(DEFAULTS))
        if isinstance(path, str):
            path = Path(path)
        self._path_ = path

        if self._path_ is not None and self._path_.exists():
            self.reload()

    def query(self, q: str) -> Any:
        return query_tree(self, q)

    def set(self, q: str, value: Any):
        trial = copy.deepcopy(dict(self))
        set_tree(trial, q, value)
        _check(trial)
        set_tree(self, q, value)

    def update(self, other):
        trial = merge_tree(copy.deepcopy(dict(self)), other)
        _check(trial)
        merge_tree(self, other)

    def reset(self):
        self.clear()
        merge_tree(self, copy.deepcopy(DEFAULTS))

    def reload(self, path: Optional[Union[str, Path]] = None):
        """Replace the settings with the defaults merged with a JSON file.

        The file is checked before anything is replaced; on failure the
        current settings and path are kept.
        """
        path = self._path_ if path is None else Path(path)
        with path.open('r') as f:
            dct = json.load(f)
        trial = merge_tree(copy.deepcopy(DEFAULTS), dct)
        _check(trial)
        self.clear()
        merge_tree(self, trial)
        self._path_ = path
        logger.info("loaded configuration from %s", path)

    def commit(self):
        if self._path_ is None:
            return
        self._path_.parent.mkdir(parents=True, exist_ok=True)
        with self._path_.open('w') as f:
            json.dump(self, f, indent=4)

    @classmethod
    def fromdict(cls, d: dict) -> Config:
        ret = cls()
        ret.update(d)
        return ret


config = Config()


def load_config(path: Union[str, Path]) -> Config:
    """Reset the global ``config`` and merge the settings stored at ``path``."""
    config.reload(path)
    return config
