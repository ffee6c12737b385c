from fun_run.runner.abc import ProcessResult, ProcessRunner
from fun_run.runner.real import RealProcessRunner
from fun_run.runner.tee import TeeWriter, tee

__all__ = [
    "ProcessResult",
    "ProcessRunner",
    "RealProcessRunner",
    "TeeWriter",
    "tee",
]
