#!/usr/bin/env python3
#
# Copyright 2022 Max Planck Insitute Magdeburg
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#
#
#
"""Parallel execution policy and the worker pool used by bulk matrix operations"""

from multiprocessing.pool import ThreadPool
from typing import Callable, Optional
import logging
import os

from psutil import cpu_count

from .names import PARALLEL_THRESHOLD, BY_ROW, BY_COLUMN, ENV_PARALLEL, ENV_MAX_WORKERS

LOG = logging.getLogger(__name__)


def _detect_parallel_capability() -> bool:
    """Check once whether fanning out work can pay off on this host"""
    if os.getenv(ENV_PARALLEL, '1') == '0':
        return False
    return (cpu_count(logical=True) or 1) > 1


def _default_max_workers() -> int:
    env = os.getenv(ENV_MAX_WORKERS)
    if env:
        try:
            return max(1, int(env))
        except ValueError:
            LOG.warning(f"Ignoring invalid value of {ENV_MAX_WORKERS}: '{env}'.")
    return cpu_count(logical=True) or 1


class MatrixPool(ThreadPool):
    """Thread pool with a lifetime bound to a single bulk operation

    A thin layer on top of `multiprocessing.pool.ThreadPool`. Worker threads
    share the backing arrays of the matrices involved, so partitions can write
    their own rows or columns of the output directly. Leaving the context
    closes the pool and joins all workers, so no thread survives the call
    that created the pool.
    """

    def __exit__(self, *args, **kwargs):
        """Wait for all workers to finish when leaving a context"""
        self.close()
        self.join()
        return False


class ParallelismPolicy:
    """Decide whether and along which dimension a bulk operation is split up

    Example:
        policy = ParallelismPolicy(threshold=0, parallel_capable=True)

    Args:
        threshold (int): (Default: 8192)
            Bulk operations on more elements than this are split into one task
            per row or column.

        parallel_capable (optional (bool)): (Default: None)
            Whether the host can run tasks in parallel. If None, it is detected
            once here: parallelism is available when more than one logical CPU
            exists and the environment variable TYPEDMATRIX_PARALLEL is not '0'.

        max_workers (optional (int)): (Default: None)
            Upper bound for the number of worker threads. If None, the value of
            TYPEDMATRIX_MAX_WORKERS or the number of logical CPUs is used.
    """

    def __init__(self,
                 threshold: int = PARALLEL_THRESHOLD,
                 parallel_capable: Optional[bool] = None,
                 max_workers: Optional[int] = None):
        self.threshold = threshold
        self.parallel_capable = _detect_parallel_capability() if parallel_capable is None else bool(parallel_capable)
        self.max_workers = _default_max_workers() if max_workers is None else max(1, max_workers)

    def should_parallelize(self, total_elements: int, branching_factor: int = 1) -> bool:
        """True iff total_elements * branching_factor exceeds the threshold and the host can parallelize"""
        return self.parallel_capable and total_elements * branching_factor > self.threshold

    @staticmethod
    def choose_outer_dimension(rows: int, cols: int) -> str:
        """Iterate over rows in the outer loop if there are no more rows than columns

        This keeps the number of tasks low and the inner loop on the longer
        dimension.
        """
        return BY_ROW if rows <= cols else BY_COLUMN

    def execute(self, task_count: int, task: Callable[[int], None], parallel: bool) -> None:
        """Run task(k) for k in range(task_count) and block until all are done

        Tasks must only write disjoint parts of the output. Exceptions raised
        by a task are re-raised in the calling thread.
        """
        if not parallel or task_count <= 1:
            for k in range(task_count):
                task(k)
            return
        processes = min(self.max_workers, task_count)
        LOG.debug(f"Splitting bulk operation into {task_count} tasks on {processes} threads.")
        with MatrixPool(processes) as pool:
            pool.map(task, range(task_count), chunksize=max(1, task_count // (4 * processes)))

    def __repr__(self):
        return (f"ParallelismPolicy(threshold={self.threshold}, parallel_capable={self.parallel_capable}, "
                f"max_workers={self.max_workers})")


DEFAULT_POLICY = ParallelismPolicy()
SEQUENTIAL = ParallelismPolicy(parallel_capable=False)
