from functools import wraps
from itertools import islice
import logging


LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class RPNError(Exception):
    pass


class InvalidExpressionError(RPNError):
    '''
    Token sequence is not a balanced postfix expression.

    Never expected from a search; the generator only builds balanced
    sequences.
    '''


class ConfigurationError(RPNError):
    pass


def wrap_user_errors(fmt):
    '''
    Decorator that converts exceptions on user input to RPNErrors.

    Passes through RPNErrors.
    '''
    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except RPNError:
                raise
            except Exception as e:
                raise RPNError(fmt.format(*args, **kwargs), e)
        return wrapper
    return decorator


def chunked(iterable, size):
    '''
    Yield successive lists of at most size items, in order.

    The last list may be shorter. Never yields an empty list.
    '''
    if size < 1:
        raise ValueError('Chunk size must be positive, got {}'.format(size))
    iterator = iter(iterable)
    while True:
        chunk = list(islice(iterator, size))
        if not chunk:
            return
        yield chunk


def setup_logging(verbose=False):
    '''
    Configure and return the package logger, logging to stderr.

    Meant to be called once per process; calling again replaces the handler.
    '''
    logger = logging.getLogger('rpnsearch')
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    return logger
