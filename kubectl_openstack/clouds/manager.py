"""Load, merge and write OpenStack client configuration (clouds.yaml) documents

A clouds document looks like:

    clouds:
      openstack:
        auth:
          auth_url: https://keystone.example.com:5000
          ...
        region_name: RegionOne

The per-cloud values are opaque, they are copied as-is between documents.
"""
import io
import os

from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap
from ruamel.yaml.error import YAMLError

from kubectl_openstack import logs
from kubectl_openstack.errors import ClientIOError, CloudsDataError, ConflictError


CLOUDS_FILE_MODE = 0o644


def load(data, source):
    try:
        document = _yaml().load(data)
    except YAMLError as e:
        raise CloudsDataError(f'unmarshaling YAML data from {source}: {e}') from e
    if document is None:
        document = CommentedMap()
    if not isinstance(document, dict):
        raise CloudsDataError(f'unmarshaling YAML data from {source}: expected a mapping at the top level')
    if document.get('clouds') is None:
        document['clouds'] = CommentedMap()
    elif not isinstance(document['clouds'], dict):
        raise CloudsDataError(f'unmarshaling YAML data from {source}: "clouds" must be a mapping')
    return document


def dump(document):
    stream = io.StringIO()
    _yaml().dump(document, stream)
    return stream.getvalue()


def cloud_names(document):
    return list(document['clouds'].keys())


def single_cloud(document, source):
    names = cloud_names(document)
    if len(names) == 0:
        raise CloudsDataError(f'{source}: expected single cloud data, got 0')
    if len(names) > 1:
        raise CloudsDataError(f'{source}: expected single cloud data, got {len(names)} ({", ".join(str(name) for name in names)})')
    return document['clouds'][names[0]]


def read_clouds_file(path):
    try:
        with open(path, 'rb') as f:
            data = f.read()
    except FileNotFoundError:
        logs.info(f'{path} does not exist, starting with an empty clouds document')
        data = ''
    except OSError as e:
        raise ClientIOError(f'reading {path}: {e}') from e
    return load(data, f'"{path}"')


def merge_cloud(document, cloud_name, cloud, force, path):
    if cloud_name in cloud_names(document):
        if force:
            print(f'Overwriting "{cloud_name}" cloud in {path}')
        else:
            raise ConflictError(f'cloud "{cloud_name}" already exists in {path}, re-run with --force to overwrite')
    else:
        print(f'Writing "{cloud_name}" cloud to {path}')
    document['clouds'][cloud_name] = cloud
    return document


def write_clouds_file(path, document):
    data = dump(document)
    logs.debug_verbose('writing clouds file', path=path)
    try:
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        # mode only applies when the file is created
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, CLOUDS_FILE_MODE)
        with open(fd, 'w', encoding='utf-8') as f:
            f.write(data)
    except OSError as e:
        raise ClientIOError(f'writing {path}: {e}') from e


def _yaml():
    yaml = YAML()
    yaml.preserve_quotes = True
    return yaml
