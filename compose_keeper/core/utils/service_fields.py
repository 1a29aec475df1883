import re
from pathlib import Path

from compose_keeper.core.compose_data_types import ImageSource
from compose_keeper.core.yaml_document import MappingNode
from compose_keeper.core.yaml_document import SequenceNode
from compose_keeper.errors.manifest import ManifestFormatError

IMAGE_KEY = 'image'
ENV_FILE_KEY = 'env_file'
VOLUMES_KEY = 'volumes'

UNSUPPORTED_FIELDS = ('build', 'container_name', 'extends')

USE_LOCAL_BUILD_TAG = '<localbuild>'
SKIP_PULL_TAG = '<skippull>'
LATEST_TAG = 'latest'


def get_unsupported_field_error_msg(field_name: str, service_name: str) -> str:
    return (f"Docker Compose field '{field_name}:' is currently not supported by compose-keeper "
            f"(service '{service_name}'). Please see the README for more information on the set "
            f"of unsupported fields.")


def check_unsupported_fields(service_name: str, service: MappingNode) -> None:
    for field_name in UNSUPPORTED_FIELDS:
        if field_name in service:
            raise ManifestFormatError(get_unsupported_field_error_msg(field_name, service_name))


def strip_custom_tags(image_name: str) -> str:
    for tag in (USE_LOCAL_BUILD_TAG, SKIP_PULL_TAG):
        image_name = re.sub(re.escape(tag), '', image_name, flags=re.IGNORECASE)
    return image_name


def split_image_tag(image_name: str) -> tuple[str, str | None]:
    repository, slash, name = image_name.rpartition('/')
    if ':' not in name:
        return image_name, None
    name, _, tag = name.rpartition(':')
    return f'{repository}{slash}{name}', tag


def replace_defined_version_tag(image_name: str, version: str) -> str:
    """Images without a tag or tagged `latest` are left as is."""
    image, tag = split_image_tag(image_name)
    if tag is None or tag == LATEST_TAG:
        return image_name
    return f'{image}:{version}'


def resolve_image(service_name: str,
                  image_name: str,
                  local_service: str,
                  service_version: str,
                  no_build: bool,
                  skip_pull: bool) -> tuple[str, ImageSource]:
    lower_image_name = image_name.lower()
    if not no_build and service_name == local_service:
        return replace_defined_version_tag(strip_custom_tags(image_name), service_version), ImageSource.BUILD
    if USE_LOCAL_BUILD_TAG in lower_image_name:
        return strip_custom_tags(image_name), ImageSource.BUILD
    if SKIP_PULL_TAG in lower_image_name or skip_pull:
        return strip_custom_tags(image_name), ImageSource.CACHE
    return image_name, ImageSource.DEFINED


def get_fully_qualified_path(file_name: str, compose_path: str | Path) -> str:
    """
    Find `file_name` as given (relative to the working directory) first and relative to
    the compose file directory second.
    """
    if (path := Path(file_name)).exists():
        return str(path.resolve())
    if (path := Path(compose_path) / file_name).exists():
        return str(path.resolve())
    raise ManifestFormatError(
        f"Could not find file: '{file_name}' either at the specified path "
        f"or in the '{compose_path}' directory."
    )


def qualify_env_files(service: MappingNode, compose_path: str | Path) -> None:
    env_file = service.get(ENV_FILE_KEY)
    if env_file is None:
        return

    if isinstance(env_file, SequenceNode):
        service.put(ENV_FILE_KEY, [
            get_fully_qualified_path(file_name, compose_path) for file_name in env_file.as_string_list()
        ])
    else:
        service.put(ENV_FILE_KEY, get_fully_qualified_path(env_file.as_string(), compose_path))


def qualify_volume(volume: str, service_name: str, compose_path: str | Path) -> str:
    if not volume.startswith('.'):
        return volume

    if ':' not in volume:
        raise ManifestFormatError(
            f"Volume '{volume}' of service '{service_name}' should define a mount path: "
            f"'{volume}:/path/in/container'"
        )
    relative_local_path, mount_path = volume.split(':', 1)
    return f'{get_fully_qualified_path(relative_local_path, compose_path)}:{mount_path}'


def qualify_volumes(service_name: str, service: MappingNode, compose_path: str | Path) -> None:
    volumes = service.get(VOLUMES_KEY)
    if volumes is None:
        return

    updated_volumes = []
    for volume in volumes.as_sequence():
        if isinstance(volume, MappingNode):
            updated_volumes += [volume.to_native()]
        else:
            updated_volumes += [qualify_volume(volume.as_string(), service_name, compose_path)]
    service.put(VOLUMES_KEY, updated_volumes)
