"""the dependency graph: GraphBuilder collects rules, Graph runs them"""

import heapq
import os
import sys

from ordered_set import OrderedSet

from .errors import CyclicDependency, DepGraphError, DuplicateOutput, MissingInput
from .make import Executor, MakeParams
from .rules import Rule, check_action
from .utils import checkseq, dedup, pathkey

# colours for the depth first search
WHITE, GREY, BLACK = 0, 1, 2


class GraphBuilder(object):
    """Collects rules. The rules can be added in any order and the calls can
    be chained:

        graph = (GraphBuilder()
                 .add_rule('out/prog.o','src/prog.asm',assemble)
                 .add_rule('out/prog',['out/prog.o'],'ld -o {$@} {$^}')
                 .build())

    Nothing is checked until build().
    """

    def __init__(self):
        self.rules = []
        self._built = False

    def add_rule(self,outputs,inputs,action):
        """outputs - a path or a sequence of paths, at least one
        inputs - a path or a sequence of paths (or None)
        action - a callable taking the output and input lists, a command
            line string (run by the shell) or a list of strings (run
            directly). See rules.cmd_action for the fields they can use.
        """
        if self._built:
            raise RuntimeError('rules cannot be added after GraphBuilder.build()')
        outputs = checkseq(outputs)
        if not outputs:
            raise ValueError('a rule needs at least one output')
        inputs = checkseq(inputs)
        action = check_action(action)
        self.rules.append(Rule(len(self.rules),outputs,inputs,action))
        return self

    def build(self):
        """check the rules and turn them into a Graph.

        Raises DuplicateOutput if two rules produce the same path and
        CyclicDependency if the rules depend on each other in a loop."""
        if self._built:
            raise RuntimeError('GraphBuilder.build() can only be called once')
        self._built = True
        rules = tuple(self.rules)

        producers = {}
        for rule in rules:
            for path in rule.outputs:
                key = pathkey(path)
                other = producers.setdefault(key,rule)
                if other is not rule:
                    raise DuplicateOutput(path,[other,rule])

        deps = []
        for rule in rules:
            found = (producers.get(pathkey(path)) for path in rule.inputs)
            deps.append(tuple(dedup(r for r in found if r is not None)))

        check_cycles(rules,deps)
        return Graph(rules,producers,deps)


def check_cycles(rules,deps):
    """three colour depth first search. Raises CyclicDependency with the
    rules on the first cycle found."""
    colour = [WHITE]*len(rules)

    for root in rules:
        if colour[root.index] != WHITE:
            continue
        # the grey rules, and the dependencies each has still to look at
        stack = [root]
        frames = [iter(deps[root.index])]
        colour[root.index] = GREY
        while frames:
            for dep in frames[-1]:
                if colour[dep.index] == GREY:
                    raise CyclicDependency(stack[stack.index(dep):])
                if colour[dep.index] == WHITE:
                    colour[dep.index] = GREY
                    stack.append(dep)
                    frames.append(iter(deps[dep.index]))
                    break
            else:
                colour[stack.pop().index] = BLACK
                frames.pop()


def toposort(rules,deps):
    """Kahn's algorithm. Independent rules come out in registration order."""
    dependents = [[] for rule in rules]
    waiting = [len(d) for d in deps]
    for rule in rules:
        for dep in deps[rule.index]:
            dependents[dep.index].append(rule)

    ready = [rule.index for rule in rules if not waiting[rule.index]]
    heapq.heapify(ready)
    order = []
    while ready:
        rule = rules[heapq.heappop(ready)]
        order.append(rule)
        for dependent in dependents[rule.index]:
            waiting[dependent.index] -= 1
            if not waiting[dependent.index]:
                heapq.heappush(ready,dependent.index)
    assert len(order) == len(rules), 'cyclic graph got past check_cycles'
    return tuple(order), tuple(tuple(d) for d in dependents)


class Graph(object):
    """A checked, acyclic set of rules. Made by GraphBuilder.build().

    The graph never changes after it is built and can be made any number
    of times; each make() call reads the file times afresh. Calling make()
    from several threads at once is safe as far as the graph is concerned,
    but the actions may then race on the same files, so calls whose outputs
    overlap must be serialised by the caller.
    """

    def __init__(self,rules,producers,deps):
        self._rules = rules
        self._producers = producers
        self._deps = tuple(deps)
        self._order, self._dependents = toposort(rules,self._deps)

    @property
    def rules(self):
        """all rules in registration order"""
        return self._rules

    @property
    def order(self):
        """all rules in the order make() visits them"""
        return self._order

    def __len__(self):
        return len(self._rules)

    def __iter__(self):
        return iter(self._order)

    def __repr__(self):
        return '<%s with %d rules>' %(self.__class__.__name__,len(self._rules))

    def producer(self,path):
        """the rule that produces path, or None for a source file"""
        return self._producers.get(pathkey(path))

    def dependencies(self,rule):
        """the rules producing rule's inputs"""
        return self._deps[rule.index]

    def dependents(self,rule):
        """the rules consuming rule's outputs"""
        return self._dependents[rule.index]

    def leaves(self):
        """the absolute paths of the inputs that no rule produces, first seen first"""
        leaves = OrderedSet()
        for rule in self._rules:
            for path in rule.inputs:
                key = pathkey(path)
                if key not in self._producers:
                    leaves.add(key)
        return list(leaves)

    def needed_rules(self,targets):
        """the rules needed to bring targets up to date, dependencies first.
        Targets that no rule produces must exist already."""
        needed = OrderedSet()
        pending = []
        for target in checkseq(targets):
            rule = self.producer(target)
            if rule is None:
                if not os.path.exists(target):
                    raise MissingInput(target)
            else:
                pending.append(rule)
        while pending:
            rule = pending.pop()
            if rule not in needed:
                needed.add(rule)
                pending.extend(self._deps[rule.index])
        return [rule for rule in self._order if rule in needed]

    def make(self,params=None,targets=None):
        """Bring the outputs up to date by running the actions of stale rules.

        params - a MakeParams (MakeParams.DEFAULT if None) or one of the
            strings 'default' and 'force_all'
        targets - only make the rules needed for these paths (all rules if
            None)

        Returns a MakeReport. Raises MissingInput before running anything if
        a source file is missing, and ActionFailed as soon as an action
        fails; whatever ran before that is left on disk.
        """
        rules = None if targets is None else self.needed_rules(targets)
        return Executor(self,params).run(rules)

    def calc_build(self,params=None,targets=None):
        """the rules that make() would run, without running them"""
        params = MakeParams.coerce(params)
        params = MakeParams(force=params.force,dry_run=True)
        return list(self.make(params,targets))

    def main(self,argv=None):
        """command line interface for a build script. Returns an exit status:

            if __name__ == "__main__":
                sys.exit(graph.main())
        """
        import argparse

        parser = argparse.ArgumentParser(description='bring build outputs up to date')
        parser.add_argument('targets',nargs='*',help='outputs to make (default: everything)')
        parser.add_argument('-n','--dry-run',dest='dryrun',action='store_true',help='only print build sequence')
        parser.add_argument('-B','--always-make',dest='force',action='store_true',help='run every rule unconditionally')
        args = parser.parse_args(argv)

        params = MakeParams(force=args.force,dry_run=args.dryrun)
        try:
            report = self.make(params,args.targets or None)
        except DepGraphError as e:
            print('depgraph: %s' %e,file=sys.stderr)
            return 1
        if not len(report):
            print('Nothing to be done.')
            return 0
        print('Build sequence:')
        for rule in report: print(rule)
        return 0
