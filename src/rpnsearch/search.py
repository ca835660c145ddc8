'''
Parallel search for expressions whose value is close to a target.

One producer, the calling thread, walks the generator and cuts its stream
into chunks. Chunks go to a fixed pool of workers; at most a few chunks per
worker are in flight at once, so the producer blocks rather than buffering an
enumeration that can be astronomically large. Workers evaluate every sequence
of their chunk in order and hand back the matches, which are written one
whole line at a time.
'''

from collections import namedtuple
from concurrent.futures import (BrokenExecutor, ProcessPoolExecutor,
                                ThreadPoolExecutor)
from enum import Enum
from threading import BoundedSemaphore, Event, Lock
import logging
import math
import os
import sys
import time

from .generator import count, generate
from .machine import evaluate
from .tokens import render
from .util import ConfigurationError, RPNError, chunked


logger = logging.getLogger(__name__)


class SearchState(Enum):
    IDLE = 'idle'
    # Producer enumerating, workers draining
    RUNNING = 'running'
    # Producer done, waiting on chunks in flight
    DRAINING = 'draining'
    TERMINATED = 'terminated'


SearchStats = namedtuple('SearchStats', 'candidates chunks matches complete')


class SearchConfig(namedtuple('SearchConfig',
                              'target max_depth tolerance chunk_size '
                              'workers executor')):
    '''
    Validated search parameters.

    :param target: Value to approximate.
    :param max_depth: Inclusive bound on operands plus unary operators.
    :param tolerance: Match when abs(value - target) < tolerance.
    :param chunk_size: Candidates per unit of work.
    :param workers: Pool size, defaults to the number of CPUs.
    :param executor: 'process' for true parallelism, 'thread' for
                     vocabularies that can't be pickled.
    '''
    __slots__ = ()

    DEFAULT_MAX_DEPTH = 6
    DEFAULT_TOLERANCE = 0.1
    DEFAULT_CHUNK_SIZE = 65536
    EXECUTORS = {
        'process': ProcessPoolExecutor,
        'thread': ThreadPoolExecutor,
    }
    # Chunks in flight per worker
    QUEUE_FACTOR = 4

    def __new__(cls, target, max_depth=DEFAULT_MAX_DEPTH,
                tolerance=DEFAULT_TOLERANCE, chunk_size=DEFAULT_CHUNK_SIZE,
                workers=None, executor='process'):
        if workers is None:
            workers = os.cpu_count() or 1
        if math.isnan(target):
            raise ConfigurationError('Target must be a number')
        if not tolerance >= 0:
            raise ConfigurationError(
                'Tolerance must be non-negative, got {}'.format(tolerance))
        if max_depth < 0:
            raise ConfigurationError(
                'Maximum depth must be non-negative, got {}'.format(max_depth))
        if chunk_size < 1:
            raise ConfigurationError(
                'Chunk size must be positive, got {}'.format(chunk_size))
        if workers < 1:
            raise ConfigurationError(
                'Worker count must be positive, got {}'.format(workers))
        if executor not in cls.EXECUTORS:
            raise ConfigurationError('No such executor {}'.format(
                repr(executor)))
        return super().__new__(cls, float(target), int(max_depth),
                               float(tolerance), int(chunk_size), int(workers),
                               executor)

    @property
    def capacity(self):
        return type(self).QUEUE_FACTOR * self.workers


def scan(sequences, target, tolerance):
    '''
    Evaluate sequences in order, returning (rendering, value) of matches.

    NaN never compares less than the tolerance, so it never matches.
    '''
    matches = []
    for sequence in sequences:
        value = evaluate(sequence)
        if abs(value - target) < tolerance:
            matches.append((render(sequence), value))
    return matches


def reference_scan(vocabulary, target, tolerance, max_depth):
    '''
    Exhaustive single threaded search, the baseline for the parallel one.
    '''
    return scan(generate(vocabulary, max_depth), target, tolerance)


class MatchWriter:
    '''
    Line oriented match sink, safe to share between threads.
    '''

    def __init__(self, stream=None):
        self.stream = stream if stream is not None else sys.stdout
        self.lock = Lock()

    def write(self, rendering, value):
        line = '{}: {}\n'.format(rendering, value)
        with self.lock:
            self.stream.write(line)
            self.stream.flush()


class Search:
    '''
    One run of the chunked parallel search. Runs to completion, once.
    '''

    def __init__(self, vocabulary, config, sink=None, logger=logger):
        self.vocabulary = vocabulary
        self.config = config
        self.sink = sink if sink is not None else MatchWriter()
        self.logger = logger
        self.state = SearchState.IDLE
        self._slots = BoundedSemaphore(config.capacity)
        self._stop = Event()
        self._lock = Lock()
        self._matches = 0
        self._failure = None

    def run(self):
        '''
        Search every depth up to the configured maximum and write matches.

        Return SearchStats. Stops early, with complete False, if the pool or
        the sink fails; re-raises the first exception raised while
        evaluating a chunk once the pool has drained.
        '''
        if self.state is not SearchState.IDLE:
            raise RPNError('Search already {}'.format(self.state.value))
        config = self.config
        self.logger.info('Searching for %r within %r up to depth %d '
                         '(%d %s workers, chunks of %d)',
                         config.target, config.tolerance, config.max_depth,
                         config.workers, config.executor, config.chunk_size)
        for depth in range(1, config.max_depth + 1):
            self.logger.debug('Depth %d: %d candidates', depth,
                              count(self.vocabulary, depth))

        start = time.perf_counter()
        candidates = chunks = 0
        self.state = SearchState.RUNNING
        executor = config.EXECUTORS[config.executor]
        try:
            with executor(max_workers=config.workers) as pool:
                for chunk in chunked(generate(self.vocabulary,
                                              config.max_depth),
                                     config.chunk_size):
                    self._slots.acquire()
                    if self._stop.is_set():
                        self._slots.release()
                        break
                    try:
                        future = pool.submit(scan, chunk, config.target,
                                             config.tolerance)
                    # Shut down or broken pool
                    except RuntimeError as e:
                        self._slots.release()
                        self._halt('Work queue closed, stopping early: '
                                   '{}'.format(e))
                        break
                    candidates += len(chunk)
                    chunks += 1
                    self.logger.debug('Dispatched chunk %d (%d candidates)',
                                      chunks, len(chunk))
                    future.add_done_callback(self._collect)
                self.state = SearchState.DRAINING
        finally:
            self.state = SearchState.TERMINATED

        if self._failure is not None:
            raise self._failure
        stats = SearchStats(candidates, chunks, self._matches,
                            not self._stop.is_set())
        self.logger.info('Searched %d candidates in %d chunks in %.2fs, '
                         '%d matches%s', stats.candidates, stats.chunks,
                         time.perf_counter() - start, stats.matches,
                         '' if stats.complete else ' (stopped early)')
        return stats

    def _halt(self, message):
        self.logger.warning(message)
        self._stop.set()

    def _collect(self, future):
        '''
        Write the matches of a finished chunk and free its slot.
        '''
        try:
            matches = future.result()
        except BrokenExecutor as e:
            self._halt('Worker pool broke, stopping early: {}'.format(e))
        except Exception as e:
            self.logger.error('Chunk failed: %s', e)
            with self._lock:
                if self._failure is None:
                    self._failure = e
            self._stop.set()
        else:
            # Callbacks run on worker threads and the producer alike
            with self._lock:
                if self._stop.is_set():
                    return
                try:
                    for rendering, value in matches:
                        self.sink.write(rendering, value)
                        self._matches += 1
                # ValueError: sink stream already closed
                except (OSError, ValueError) as e:
                    self._halt('Cannot write match, stopping early: '
                               '{}'.format(e))
        finally:
            self._slots.release()
