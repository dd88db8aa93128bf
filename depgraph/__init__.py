"""Makefile style incremental rebuilding from inside a python build script.

Rules are registered with a GraphBuilder, checked by build() and run by
Graph.make(), which only runs the actions whose outputs are missing or older
than their inputs (or depend on a rule that ran).
"""

from .errors import (DepGraphError, BuildError, CyclicDependency, DuplicateOutput,
                     MakeError, MissingInput, ActionFailed)
from .graph import GraphBuilder, Graph
from .make import (MakeParams, MakeReport, Executor,
                   PENDING, SKIPPED, RUNNING, SUCCEEDED, FAILED)
from .rules import Rule
from .staleness import StalenessEvaluator

__version__ = '0.4.0'
