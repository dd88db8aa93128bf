import os
from collections.abc import Iterable


def checkseq(val):
    """replaces None with an empty tuple and wraps single paths
    into a tuple too."""
    if val is None: val = tuple()
    elif isinstance(val,(str,bytes,os.PathLike)): val = (val,)
    elif not isinstance(val,Iterable): val = (val,)
    return tuple(val)

def dedup(seq):
    """deduplicate a list while keeping the original order"""
    seen = set()
    seen_add = seen.add
    return [ x for x in seq if not (x in seen or seen_add(x))]

def pathkey(path):
    """the identity of a path: absolute and normalised"""
    return os.path.abspath(os.fsdecode(path))

def joinpaths(paths):
    return ' '.join(os.fsdecode(p) for p in paths)
