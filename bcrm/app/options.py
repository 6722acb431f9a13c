"""Typed option values for a bcrm run.

``Options`` is built once from the parsed command line and passed by
reference to everything that needs it; there is no process-wide option
holder. ``source`` and ``destination`` are ``None`` when the option was not
given at all, which is how presence is tracked.
"""

from __future__ import annotations

import argparse
import math
import re
from dataclasses import dataclass, field

from bcrm.config.settings import DEFAULT_RESIZE_THRESHOLD, SettingsStore
from bcrm.domain.models import ImageSpec, ImageType, SizeValue
from bcrm.storage.exceptions import OptionValueError


_SIZE_RE = re.compile(r"^(\d+)([KMGT])$", re.IGNORECASE)

# Multipliers to megabytes; kilobytes are rounded up below
_MB_PER_UNIT = {"M": 1, "G": 1024, "T": 1024 * 1024}


def parse_size(value: str, option: str = "size") -> SizeValue:
    """Parse a size such as ``200M`` or ``4G``.

    Args:
        value: Size string with a K, M, G or T suffix
        option: Option name used in error messages

    Raises:
        OptionValueError: If the value has no number or no valid suffix
    """
    match = _SIZE_RE.match(value.strip())
    if not match:
        raise OptionValueError(
            option, value, "expected a number followed by K, M, G or T"
        )
    number = int(match.group(1))
    unit = match.group(2).upper()
    if unit == "K":
        megabytes = math.ceil(number / 1024)
    else:
        megabytes = number * _MB_PER_UNIT[unit]
    return SizeValue(text=f"{number}{unit}", megabytes=megabytes)


def _parse_image_type(value: str) -> ImageType | None:
    try:
        return ImageType(value.lower())
    except ValueError:
        return None


def parse_image_spec(value: str, option: str = "image") -> ImageSpec:
    """Parse ``<path>:<type>[:<virtual-size>]``.

    The path may itself contain colons; the type is found from the right.

    Raises:
        OptionValueError: If the type is unknown, the size is malformed or
            the path is empty
    """
    parts = value.split(":")
    if len(parts) < 2:
        raise OptionValueError(option, value, "expected <path>:<type>[:<size>]")

    size = None
    image_type = _parse_image_type(parts[-1])
    path_parts = parts[:-1]
    if image_type is None and len(parts) >= 3:
        image_type = _parse_image_type(parts[-2])
        if image_type is not None:
            size = parse_size(parts[-1], option)
            path_parts = parts[:-2]
    if image_type is None:
        supported = ", ".join(t.value for t in ImageType)
        raise OptionValueError(option, value, f"image type must be one of {supported}")

    path = ":".join(path_parts)
    if not path:
        raise OptionValueError(option, value, "image path is empty")
    return ImageSpec(path=path, image_type=image_type, size=size)


def _optional_size(value: str | None, option: str) -> SizeValue | None:
    if value is None or value == "":
        return None
    return parse_size(value, option)


@dataclass(frozen=True)
class Options:
    """Every option accepted by the bcrm command line."""

    source: str | None = None
    destination: str | None = None
    source_image: ImageSpec | None = None
    destination_image: ImageSpec | None = None
    check: bool = False
    compress: bool = False
    split: bool = False
    hostname: str | None = None
    remove_pkgs: tuple[str, ...] = ()
    new_vg_name: str | None = None
    vg_free_size: SizeValue | None = None
    encrypt_with_password: str | None = field(default=None, repr=False)
    use_all_pvs: bool = False
    lvm_expand: str | None = None
    make_uefi: bool = False
    swap_size: SizeValue | None = None
    resize_threshold: SizeValue = field(
        default_factory=lambda: parse_size(DEFAULT_RESIZE_THRESHOLD)
    )
    schroot: bool = False
    no_cleanup: bool = False
    disable_mount: tuple[str, ...] = ()
    to_lvm: tuple[str, ...] = ()
    all_to_lvm: bool = False
    include_partition: tuple[str, ...] = ()
    boot_size: SizeValue | None = None
    quiet: bool = False
    debug: bool = False
    trace: bool = False

    @property
    def source_given(self) -> bool:
        return self.source is not None

    @property
    def destination_given(self) -> bool:
        return self.destination is not None

    @classmethod
    def from_namespace(
        cls, namespace: argparse.Namespace, settings: SettingsStore | None = None
    ) -> Options:
        """Convert parsed arguments into typed options.

        Values missing from the command line fall back to ``settings``; errors in
        those values name the settings file rather than a flag.

        Raises:
            OptionValueError: If a size or image option is malformed
        """
        settings = settings or SettingsStore()
        if namespace.resize_threshold:
            resize_threshold = parse_size(
                namespace.resize_threshold, "--resize-threshold"
            )
        else:
            resize_threshold = parse_size(
                settings.get("resize_threshold", DEFAULT_RESIZE_THRESHOLD),
                settings.describe("resize_threshold"),
            )
        return cls(
            source=namespace.source,
            destination=namespace.destination,
            source_image=(
                parse_image_spec(namespace.source_image, "--source-image")
                if namespace.source_image
                else None
            ),
            destination_image=(
                parse_image_spec(namespace.destination_image, "--destination-image")
                if namespace.destination_image
                else None
            ),
            check=namespace.check,
            compress=namespace.compress,
            split=namespace.split,
            hostname=namespace.hostname,
            remove_pkgs=tuple((namespace.remove_pkgs or "").split()),
            new_vg_name=namespace.new_vg_name,
            vg_free_size=_optional_size(namespace.vg_free_size, "--vg-free-size"),
            encrypt_with_password=namespace.encrypt_with_password,
            use_all_pvs=namespace.use_all_pvs,
            lvm_expand=namespace.lvm_expand,
            make_uefi=namespace.make_uefi,
            swap_size=_optional_size(namespace.swap_size, "--swap-size"),
            resize_threshold=resize_threshold,
            schroot=namespace.schroot,
            no_cleanup=namespace.no_cleanup,
            disable_mount=tuple(namespace.disable_mount or ()),
            to_lvm=tuple(namespace.to_lvm or ()),
            all_to_lvm=namespace.all_to_lvm,
            include_partition=tuple(namespace.include_partition or ()),
            boot_size=_optional_size(namespace.boot_size, "--boot-size"),
            quiet=namespace.quiet,
            debug=namespace.debug,
            trace=namespace.trace,
        )
