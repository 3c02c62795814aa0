from logging import INFO, DEBUG, getLevelName
import datetime
import io
import os
import sys

from ruamel.yaml import YAML


def strtobool(value):
    value = value.strip().lower()
    if value in ('y', 'yes', 't', 'true', 'on', '1'):
        return True
    elif value in ('n', 'no', 'f', 'false', 'off', '0', ''):
        return False
    else:
        raise ValueError(f'invalid truth value {value!r}')


DEBUG_VERBOSE = 'verbose debug'


def info(*args, **kwargs):
    log(INFO, *args, **kwargs)


def debug(*args, **kwargs):
    log(DEBUG, *args, **kwargs)


def debug_verbose(*args, **kwargs):
    log(DEBUG_VERBOSE, yaml_dump([list(args), kwargs]))


def log(level, *args, **kwargs):
    if not _skip_log_level(level):
        _print_log_msg(level, _get_log_msg(level, *args, **kwargs))


# yaml dumping


def yaml_dump(data):
    yaml = YAML(typ='safe', pure=True)
    yaml.default_flow_style = False
    yaml.representer.ignore_aliases = lambda data: True
    stream = io.StringIO()
    yaml.dump(data, stream)
    return stream.getvalue()


# private functions


def _debug_enabled():
    return strtobool(os.environ.get('KUBECTL_OPENSTACK_DEBUG', 'n'))


def _debug_verbose_enabled():
    return strtobool(os.environ.get('KUBECTL_OPENSTACK_DEBUG_VERBOSE', 'n'))


def _debug_file():
    return os.environ.get('KUBECTL_OPENSTACK_DEBUG_FILE', '').strip()


def _get_log_msg(level, *args, **kwargs):
    msg = datetime.datetime.now().strftime('%Y-%m-%d %H:%M') + ' ' + _get_level_name(level) + ' '
    if len(kwargs) > 0:
        msg += '(' + ','.join([f'{k}="{v}"' for k, v in kwargs.items()]) + ') '
    msg += ' '.join(str(arg) for arg in args)
    return msg


def _get_level_name(level):
    if level == DEBUG_VERBOSE:
        return getLevelName(DEBUG)
    else:
        return getLevelName(level)


def _skip_log_level(level):
    debug_file = _debug_file()
    return (
           (level == DEBUG and not _debug_enabled() and not debug_file)
        or (level == DEBUG_VERBOSE and not _debug_verbose_enabled() and not debug_file)
    )


def _print_log_msg(level, msg):
    debug_file = _debug_file()
    if debug_file:
        with open(debug_file, 'a') as f:
            print(msg, file=f)
    if (
        (level == DEBUG and (_debug_enabled() or _debug_verbose_enabled()))
        or (level == DEBUG_VERBOSE and _debug_verbose_enabled())
        or level not in [DEBUG, DEBUG_VERBOSE]
    ):
        print(msg, file=sys.stderr)
        sys.stderr.flush()
