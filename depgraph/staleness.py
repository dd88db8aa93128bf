"""decides which rules have to run"""

import os

from .errors import MissingInput
from .utils import pathkey


class StalenessEvaluator(object):
    """Answers "must this rule run?" for one make() call.

    Modification times are read lazily and cached for the lifetime of the
    evaluator, so create a new one for every call. After a rule's action has
    run, forget() its outputs so that later questions see the new times.
    """

    def __init__(self,graph):
        self.graph = graph
        self._mtimes = {}

    def get_mtime(self,path):
        """modification time in ns, or None if path doesn't exist"""
        key = pathkey(path)
        if key not in self._mtimes:
            try:
                self._mtimes[key] = os.stat(path).st_mtime_ns
            except OSError:
                # missing, or unreachable (a parent is a file, no permission)
                self._mtimes[key] = None
        return self._mtimes[key]

    def exists(self,path):
        return self.get_mtime(path) is not None

    def forget(self,paths):
        for path in paths:
            self._mtimes.pop(pathkey(path),None)

    def check_leaves(self,rules):
        """raises MissingInput for the first leaf input of rules that is
        missing from disk"""
        for rule in rules:
            for path in rule.inputs:
                if self.graph.producer(path) is None and not self.exists(path):
                    raise MissingInput(path,rule)

    def is_stale(self,rule,ran=()):
        """ran is the collection of rules that have run (or would have run)
        earlier in the same call."""
        for path in rule.inputs:
            producer = self.graph.producer(path)
            if producer is not None and producer in ran:
                return True

        out_mtimes = [self.get_mtime(path) for path in rule.outputs]
        if any(mtime is None for mtime in out_mtimes):
            return True
        if not rule.inputs:
            return False

        in_mtimes = []
        for path in rule.inputs:
            mtime = self.get_mtime(path)
            if mtime is None:
                raise MissingInput(path,rule)
            in_mtimes.append(mtime)
        return min(out_mtimes) < max(in_mtimes)
