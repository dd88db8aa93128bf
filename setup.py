from setuptools import setup

setup(name='depgraph',
        version='0.4.0',
        description='Manage files that depend on each other and rebuild them as necessary, like a makefile',
        classifiers=[
          "License :: OSI Approved :: MIT License",
          "Programming Language :: Python :: 3",
          "Development Status :: 3 - Alpha",
          "Intended Audience :: Developers",
          "Natural Language :: English",
          "Operating System :: OS Independent",
          "Topic :: Software Development :: Build Tools"
           ],
        keywords='make build dependency graph',
        packages=['depgraph'],
        python_requires='>=3.8',
        install_requires=['ordered-set'],
        extras_require={'test':['pytest','sh']},
        long_description="""\
A library for managing files that depend on each other, rebuilding them as
necessary like a makefile. It is meant to be used from within a python build
script (a build hook for instance) rather than shelling out to make.

Each rule names its output files, its input files and an action that makes
the outputs from the inputs. The action is a python callable that is passed
the lists of output and input paths, a command line string run by the shell,
or a list of strings run directly. Command lines can contain the fields
{outputs} ({targets}, {$@}), {inputs} ({reqs}, {$^}) and {$<} (first input)::

    from depgraph import GraphBuilder, MakeParams

    def assemble(outputs, inputs):
        subprocess.check_call(['yasm', '-f', 'elf64', '-o', outputs[0]] + inputs)

    graph = (GraphBuilder()
             .add_rule('out/prog.o', ['src/prog.asm'], assemble)
             .add_rule('out/prog', ['out/prog.o'], 'ld -o {$@} {$^}')
             .build())   # raises CyclicDependency / DuplicateOutput
    report = graph.make()   # or graph.make(MakeParams.FORCE_ALL)
    print(report.count, 'rules ran')

A rule runs when one of its outputs is missing, when its oldest output is
older than its newest input, or when a rule producing one of its inputs ran
during the same make() call. Rules run one at a time in dependency order,
independent rules in the order they were added. The first failing action
stops the build with ActionFailed; a missing source file stops it with
MissingInput before anything runs.

graph.main() supplies a simple commandline interface (-n dry run,
-B always make) for build scripts.
        """,
        )
