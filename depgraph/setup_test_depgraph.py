"""fixtures shared by the depgraph test modules"""

import os
import shutil
import tempfile
import unittest

from sh import touch

SECOND = 10**9
# an arbitrary point well in the past to base file times on
EPOCH = 1000000000 * SECOND


class Recorder(object):
    """an action that writes its outputs and remembers every call"""

    def __init__(self,calls=None,name=None):
        self.calls = [] if calls is None else calls
        self.name = name

    def __call__(self,outputs,inputs):
        self.calls.append(self.name if self.name is not None else (outputs,inputs))
        for path in outputs:
            with open(path,'w') as fobj:
                fobj.write(' '.join(inputs)+'\n')


class Failure(Exception):
    pass


def fail(outputs,inputs):
    raise Failure('cannot make %s' %outputs[0])


class TempDirTestCase(unittest.TestCase):
    """gives every test an empty directory to build in"""

    def setUp(self):
        self.tmpdir = tempfile.mkdtemp(prefix='depgraph-tests')

    def tearDown(self):
        if os.path.isdir(self.tmpdir):
            shutil.rmtree(self.tmpdir)

    def path(self,*names):
        return os.path.join(self.tmpdir,*names)

    def create(self,name,age=None):
        """creates the file and sets its time to EPOCH + age seconds"""
        path = self.path(name)
        touch(path)
        if age is not None:
            self.set_mtime(name,age)
        return path

    def set_mtime(self,name,age):
        t = EPOCH + age*SECOND
        os.utime(self.path(name),ns=(t,t))

    def get_mtime(self,name):
        return os.stat(self.path(name)).st_mtime_ns
