#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Utility functions for the raster reprojection pipeline.

This module provides common utility functions used across the reprojection
modules, including timing, scanline chunking, and parallel processing.
"""
import time
import functools
from typing import Callable, Any, List, Optional

from tqdm import tqdm
from joblib import Parallel, delayed

from submaptive.core.config import PERFORMANCE_CONFIG, CHUNK_ROWS, N_JOBS
from submaptive.core.logging_config import get_module_logger

# Initialize logger
logger = get_module_logger(__name__)


def timer(func: Callable) -> Callable:
    """
    Log the wall time of a resampling step at debug level.

    The duration is logged even when the step raises, tagged with the
    qualified name so Map.to_image and friends are told apart.
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        started = time.perf_counter()
        outcome = "failed"
        try:
            result = func(*args, **kwargs)
            outcome = "done"
            return result
        finally:
            elapsed = time.perf_counter() - started
            logger.debug(f"{func.__qualname__} {outcome} in {elapsed * 1000:.1f} ms")
    return wrapper


def row_chunks(height: int, chunk_rows: int = CHUNK_ROWS) -> List[slice]:
    """
    Split the rows of a raster into contiguous scanline blocks.

    Parameters
    ----------
    height : int
        Number of rows.
    chunk_rows : int, optional
        Rows per block, by default CHUNK_ROWS from config. The last block
        may be shorter.

    Returns
    -------
    List[slice]
        Row slices covering [0, height) in order.
    """
    if chunk_rows <= 0:
        raise ValueError("chunk_rows must be positive")
    return [slice(start, min(start + chunk_rows, height)) for start in range(0, height, chunk_rows)]


def parallel_apply(
    func: Callable,
    iterable: List[Any],
    n_jobs: Optional[int] = None,
    prefer: Optional[str] = None,
    progress: Optional[bool] = None,
    **kwargs
) -> List[Any]:
    """
    Apply a function to an iterable in parallel.

    Parameters
    ----------
    func : Callable
        Function to apply.
    iterable : List[Any]
        Items to process.
    n_jobs : int, optional
        Number of jobs. If None, uses N_JOBS from config.
    prefer : str, optional
        'processes' or 'threads'. If None, uses PERFORMANCE_CONFIG.
    progress : bool, optional
        Whether to show progress. If None, uses PERFORMANCE_CONFIG.
    **kwargs
        Additional arguments to pass to the function.

    Returns
    -------
    List[Any]
        Results of applying the function to each item, in input order.
    """
    if n_jobs is None:
        n_jobs = N_JOBS
    if prefer is None:
        prefer = PERFORMANCE_CONFIG.get("prefer", "threads")
    if progress is None:
        progress = PERFORMANCE_CONFIG.get("show_progress", False)

    # Check if parallelism is enabled
    if not PERFORMANCE_CONFIG.get("use_parallel", True) or n_jobs == 1:
        logger.debug(f"Running {len(iterable)} tasks sequentially")
        if progress:
            iterable = tqdm(iterable, desc=f"Running {func.__name__}")
        return [func(item, **kwargs) for item in iterable]

    logger.debug(f"Running {len(iterable)} tasks in parallel with {n_jobs} jobs")
    results = Parallel(n_jobs=n_jobs, prefer=prefer, verbose=10 if progress else 0)(
        delayed(func)(item, **kwargs) for item in iterable
    )

    return results
