#!/usr/bin/env python
"""example script for package depgraph.

Concatenates a few text files into a bundle, the way a build script would
drive an assembler and a linker.
    python -m depgraph.example [outdir] [-n] [-B] [targets...]
"""
import os
import sys

from sh import cat, mkdir, touch

from depgraph import GraphBuilder


def concat(outputs,inputs):
    mkdir('-p',os.path.dirname(outputs[0]))
    cat(*inputs,_out=outputs[0])

def make_sources(srcdir):
    mkdir('-p',srcdir)
    for name in 'a.txt','b.txt':
        path = os.path.join(srcdir,name)
        if not os.path.exists(path):
            with open(path,'w') as fobj:
                fobj.write(name+'\n')

def make_graph(outdir):
    src = os.path.join(outdir,'src')
    obj = os.path.join(outdir,'obj')
    return (GraphBuilder()
            .add_rule(os.path.join(outdir,'bundle.txt'),
                      [os.path.join(obj,'a.obj'),os.path.join(obj,'b.obj')],
                      concat)
            .add_rule(os.path.join(obj,'a.obj'),os.path.join(src,'a.txt'),concat)
            .add_rule(os.path.join(obj,'b.obj'),os.path.join(src,'b.txt'),
                      'mkdir -p "$(dirname {$@})" && cp {$<} {$@}')
            .add_rule(os.path.join(outdir,'stamp'),os.path.join(outdir,'bundle.txt'),
                      lambda outputs,inputs: touch(*outputs))
            .build())


if __name__=="__main__":
    outdir = 'example-build'
    argv = sys.argv[1:]
    if argv and not argv[0].startswith('-'):
        outdir, argv = argv[0], argv[1:]
    make_sources(os.path.join(outdir,'src'))
    sys.exit(make_graph(outdir).main(argv))
