"""running the actions of a graph in dependency order"""

import warnings

from ordered_set import OrderedSet

from .errors import ActionFailed
from .staleness import StalenessEvaluator

# execution status of a rule within one make() call
PENDING = 'pending'
SKIPPED = 'skipped'
RUNNING = 'running'
SUCCEEDED = 'succeeded'
FAILED = 'failed'


class MakeParams(object):
    """options for Graph.make.
        force - treat every rule as stale regardless of file times
        dry_run - only calculate the build sequence, don't run any actions
    """
    __slots__ = ('force','dry_run')
    DEFAULT = None # set below
    FORCE_ALL = None

    def __init__(self,force=False,dry_run=False):
        set_ = super(MakeParams,self).__setattr__
        set_('force',bool(force))
        set_('dry_run',bool(dry_run))

    def __setattr__(self,name,value):
        raise AttributeError('make parameters are immutable')

    def __delattr__(self,name):
        raise AttributeError('make parameters are immutable')

    def __repr__(self):
        return '%s(force=%r, dry_run=%r)' %(self.__class__.__name__,self.force,self.dry_run)

    def __eq__(self,other):
        if not isinstance(other,MakeParams):
            return NotImplemented
        return (self.force,self.dry_run) == (other.force,other.dry_run)

    def __hash__(self):
        return hash((self.force,self.dry_run))

    @classmethod
    def coerce(cls,params):
        """accepts a MakeParams, None, 'default' or 'force_all'"""
        if params is None or params == 'default':
            return cls.DEFAULT
        if params == 'force_all':
            return cls.FORCE_ALL
        if isinstance(params,MakeParams):
            return params
        raise ValueError('unrecognised make parameters: %r' %(params,))

MakeParams.DEFAULT = MakeParams()
MakeParams.FORCE_ALL = MakeParams(force=True)


class MakeReport(object):
    """what happened during one make() call. Iterating over it gives the
    rules that ran, in the order they ran."""

    def __init__(self,rules=(),dry_run=False):
        self.dry_run = dry_run
        self.status = dict((rule,PENDING) for rule in rules)
        self.executed = []
        self.skipped = []

    @property
    def count(self):
        return len(self.executed)

    def __len__(self):
        return len(self.executed)

    def __iter__(self):
        return iter(self.executed)

    def __repr__(self):
        return '<%s executed=%d skipped=%d>' %(self.__class__.__name__,len(self.executed),len(self.skipped))


class Executor(object):
    """walks a graph in topological order running the stale rules.

    All of the state of a run lives in the executor, so use a new one for
    every make() call.
    """

    def __init__(self,graph,params=None):
        self.graph = graph
        self.params = MakeParams.coerce(params)
        self.evaluator = StalenessEvaluator(graph)

    def run(self,rules=None):
        """rules - the rules to consider (all of them by default). They are
        visited in the graph's topological order whatever order they are
        given in."""
        if rules is None:
            selected = self.graph.order
        else:
            wanted = set(rules)
            selected = [rule for rule in self.graph.order if rule in wanted]

        # a missing source file must stop the build before anything runs
        self.evaluator.check_leaves(selected)

        report = MakeReport(selected,dry_run=self.params.dry_run)
        ran = OrderedSet()
        for rule in selected:
            if self.params.force or self.evaluator.is_stale(rule,ran):
                self.execute(rule,report)
                ran.add(rule)
            else:
                report.status[rule] = SKIPPED
                report.skipped.append(rule)
        return report

    def execute(self,rule,report):
        if self.params.dry_run:
            report.status[rule] = SUCCEEDED
            report.executed.append(rule)
            return
        report.status[rule] = RUNNING
        try:
            rule.run()
        except Exception as e:
            report.status[rule] = FAILED
            raise ActionFailed(rule,e,report) from e
        report.status[rule] = SUCCEEDED
        report.executed.append(rule)

        self.evaluator.forget(rule.outputs)
        missing = [path for path in rule.outputs if not self.evaluator.exists(path)]
        if missing:
            warnings.warn('the action for %r did not create %r' %(rule,missing),stacklevel=4)
