import datetime
from . import mfem_orig


def print_(*args):
    if mfem_orig.isRoot:
        print(*args)


def print_initialize(name="mfem_apps"):
    print_("\n---------------------Initialization--------------------------")
    if mfem_orig.isParallel():
        print_(name, "starts at", datetime.datetime.now(), " with ", str(mfem_orig.size), "processors")
    else:
        print_(name, "starts at", datetime.datetime.now(), "in serial mode")


def wait():
    if mfem_orig.isParallel():
        from mpi4py import MPI
        MPI.COMM_WORLD.scatter([0] * MPI.COMM_WORLD.size, root=0)
    else:
        return


def getMax(data):
    if mfem_orig.isParallel():
        from mpi4py import MPI
        return MPI.COMM_WORLD.allreduce(data, op=MPI.MAX)
    else:
        return data


def getSum(data):
    if mfem_orig.isParallel():
        from mpi4py import MPI
        return MPI.COMM_WORLD.allreduce(data, op=MPI.SUM)
    else:
        return data
