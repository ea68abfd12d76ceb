"""Attribute tree helpers: dot-key expansion, lookup, removal and merging.

Apart from deep_merge, which updates its target, these return new trees and
leave their inputs untouched, so the attributes dict attached to a caller's
event is never modified.
"""


def _copy_dicts(value):
    if isinstance(value, dict):
        return {k: _copy_dicts(v) for k, v in value.items()}
    return value


def deep_merge(target: dict, other: dict) -> dict:
    """Recursively merge *other* into *target* in place and return *target*.

    Nested dicts merge key-wise; on any other collision the value from
    *other* wins. Nested dicts are copied before they are written to, so
    dicts shared with other structures are never modified.
    """
    for key, value in other.items():
        existing = target.get(key)
        if isinstance(existing, dict) and isinstance(value, dict):
            target[key] = deep_merge(dict(existing), value)
        else:
            target[key] = _copy_dicts(value)
    return target


def _expand_value(value, ancestors: frozenset):
    if isinstance(value, dict):
        return expand_attributes(value, ancestors)
    if isinstance(value, (list, tuple)):
        return [
            expand_attributes(v, ancestors) if isinstance(v, dict) else v
            for v in value
            if id(v) not in ancestors
        ]
    return value


def expand_attributes(attributes: dict, _ancestors: frozenset = frozenset()) -> dict:
    """Expand dotted keys into nested dicts.

    ``{"a.b": 1, "a": {"c": 2}}`` becomes ``{"a": {"b": 1, "c": 2}}`` in
    either declaration order. Keys are stringified. Values referring back to
    an enclosing dict are dropped.
    """
    ancestors = _ancestors | {id(attributes)}
    expanded = {}
    for original_key, value in attributes.items():
        if id(value) in ancestors:
            continue
        segments = str(original_key).split(".")
        value = _expand_value(value, ancestors)
        for segment in reversed(segments[1:]):
            value = {segment: value}
        key = segments[0]

        existing = expanded.get(key)
        if isinstance(existing, dict) and isinstance(value, dict):
            deep_merge(existing, value)
        else:
            expanded[key] = value
    return expanded


def compact_attributes(tree: dict) -> dict:
    """Drop None values and empty containers. False, 0 and "" are kept."""
    compacted = {}
    for key, value in tree.items():
        if isinstance(value, dict):
            value = compact_attributes(value)
        if value is None or (isinstance(value, (dict, list, tuple)) and not value):
            continue
        compacted[key] = value
    return compacted


def attribute_value(tree: dict | None, path):
    """Look up a path of keys through nested dicts; None when absent."""
    value = tree
    for segment in path:
        if not isinstance(value, dict):
            return None
        value = value.get(segment)
    return value


def remove_attribute(tree: dict, path) -> dict:
    """Return *tree* without *path*, pruning parents left empty.

    Unchanged subtrees are shared with the input; if the path is absent the
    input itself is returned.
    """
    key, rest = path[0], path[1:]
    if key not in tree:
        return tree

    if rest:
        child = tree[key]
        if not isinstance(child, dict):
            return tree
        new_child = remove_attribute(child, rest)
        if new_child is child:
            return tree
        pruned = dict(tree)
        if new_child:
            pruned[key] = new_child
        else:
            del pruned[key]
        return pruned

    pruned = dict(tree)
    del pruned[key]
    return pruned
