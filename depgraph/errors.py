"""exceptions raised by the dependency graph.

BuildError subclasses come out of GraphBuilder.build() and mean the rules
themselves are wrong. MakeError subclasses come out of Graph.make() and mean
something on disk, or an action, let the build down.
"""


class DepGraphError(Exception):
    """base class of every error raised by depgraph"""


class BuildError(DepGraphError):
    pass


class CyclicDependency(BuildError):
    """the rules in cycle (in dependency order) each consume an output of the
    next one, and the last consumes an output of the first."""
    def __init__(self,cycle):
        self.cycle = list(cycle)
        chain = ' -> '.join(repr(rule) for rule in self.cycle + self.cycle[:1])
        super(CyclicDependency,self).__init__('cyclic dependency between rules: %s' %chain)


class DuplicateOutput(BuildError):
    def __init__(self,path,rules=()):
        self.path = path
        self.rules = list(rules)
        msg = 'output %r is produced by more than one rule' %path
        if self.rules:
            msg += ': ' + ', '.join(repr(rule) for rule in self.rules)
        super(DuplicateOutput,self).__init__(msg)


class MakeError(DepGraphError):
    pass


class MissingInput(MakeError):
    """a path that no rule produces and that doesn't exist"""
    def __init__(self,path,rule=None):
        self.path = path
        self.rule = rule
        if rule is None:
            msg = 'no rule or file found for %r' %path
        else:
            msg = 'no rule or file found for %r, needed by %r' %(path,rule)
        super(MissingInput,self).__init__(msg)


class ActionFailed(MakeError):
    """the action of rule raised cause. report describes the rules that had
    already been resolved when it happened."""
    def __init__(self,rule,cause,report=None):
        self.rule = rule
        self.cause = cause
        self.report = report
        super(ActionFailed,self).__init__('action failed for outputs %r (inputs %r): %s'
                                          %(list(rule.outputs),list(rule.inputs),cause))
