"""build rules and the actions attached to them"""

import os
import subprocess
from collections.abc import Iterable

from .utils import joinpaths


class Rule(object):
    """One build step: the outputs that action produces from inputs.

    Rules are created by GraphBuilder.add_rule and are frozen once created.
    index is the registration position and doubles as the rule's identity
    when rules are referred to from errors and reports.
    """
    __slots__ = ('index','outputs','inputs','action')

    def __init__(self,index,outputs,inputs,action):
        set_ = super(Rule,self).__setattr__
        set_('index',index)
        set_('outputs',tuple(outputs))
        set_('inputs',tuple(inputs))
        set_('action',action)

    def __setattr__(self,name,value):
        raise AttributeError('rules are immutable')

    def __delattr__(self,name):
        raise AttributeError('rules are immutable')

    def __repr__(self):
        return '<%s(#%d, outputs=%r)>' %(self.__class__.__name__,self.index,
                                         [os.fsdecode(p) for p in self.outputs])

    def run(self):
        run_action(self.action,self.outputs,self.inputs)


def check_action(action):
    """raises TypeError for anything that can't be used as an action"""
    if isinstance(action,str):
        return action
    if isinstance(action,(list,tuple)):
        if not all(isinstance(part,str) for part in action):
            raise TypeError('command actions must only contain strings: %r' %(action,))
        return list(action)
    if callable(action):
        return action
    raise TypeError('an action must be a callable, a command string or a list of strings, not %r' %(action,))


def run_action(action,outputs,inputs):
    """run the recipe. Callables get the output and input lists, commands
    are expanded with cmd_action and run with subprocess."""
    if isinstance(action,str):
        cmd = cmd_action(action,outputs,inputs)
        subprocess.check_call(cmd,shell=True)
    elif isinstance(action,list):
        cmd = cmd_action(action,outputs,inputs)
        subprocess.check_call(cmd,shell=False)
    else:
        action(list(outputs),list(inputs))


def cmd_action(cmd,outputs,inputs):
    """expands the command line string using the rule's paths"""
    param = {'outputs':joinpaths(outputs),
             'inputs':joinpaths(inputs)}
    param2 = {'targets':param['outputs'],
              'reqs':param['inputs'],
              '$@':param['outputs'],
              '$^':param['inputs'],
              '$<':os.fsdecode(inputs[0]) if len(inputs) else '',
              }
    param.update(param2)

    if isinstance(cmd,str):
        fullcmd = cmd.format(**param)
    elif isinstance(cmd,Iterable):
        fullcmd = [part.format(**param) for part in cmd]
    return fullcmd
