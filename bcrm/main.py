import argparse
import sys

from bcrm.app.options import Options
from bcrm.app.usage import SHORT_USAGE, USAGE
from bcrm.config.settings import load_settings
from bcrm.logging import LoggerFactory, operation_context, setup_logging
from bcrm.storage.exceptions import OptionValueError, UnexpectedIOError, ValidationError
from bcrm.storage.validation import validate_targets


EXIT_OK = 0
EXIT_VALIDATION_FAILED = 1
EXIT_BAD_OPTION = 2
EXIT_UNEXPECTED_IO = 3


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="bcrm", usage=SHORT_USAGE, add_help=False)
    parser.add_argument("-h", "--help", action="store_true")
    parser.add_argument("-s", "--source")
    parser.add_argument("-d", "--destination")
    parser.add_argument("-S", "--source-image")
    parser.add_argument("-D", "--destination-image")
    parser.add_argument("-c", "--check", action="store_true")
    parser.add_argument("-z", "--compress", action="store_true")
    parser.add_argument("-l", "--split", action="store_true")
    parser.add_argument("-H", "--hostname")
    parser.add_argument("-R", "--remove-pkgs")
    parser.add_argument("-n", "--new-vg-name")
    parser.add_argument("-F", "--vg-free-size")
    parser.add_argument("-e", "--encrypt-with-password")
    parser.add_argument("-p", "--use-all-pvs", action="store_true")
    parser.add_argument("-E", "--lvm-expand")
    parser.add_argument("-u", "--make-uefi", action="store_true")
    parser.add_argument("-w", "--swap-size")
    parser.add_argument("-m", "--resize-threshold")
    parser.add_argument("-T", "--schroot", action="store_true")
    parser.add_argument("-C", "--no-cleanup", action="store_true")
    parser.add_argument("-M", "--disable-mount", action="append")
    parser.add_argument("-L", "--to-lvm", action="append")
    parser.add_argument("-A", "--all-to-lvm", action="store_true")
    parser.add_argument("-I", "--include-partition", action="append")
    parser.add_argument("-q", "--quiet", action="store_true")
    parser.add_argument("-b", "--boot-size")
    parser.add_argument("--debug", action="store_true")
    parser.add_argument("--trace", action="store_true")
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.help:
        print(USAGE, file=sys.stderr)
        return EXIT_OK

    settings = load_settings()
    try:
        options = Options.from_namespace(args, settings)
    except OptionValueError as error:
        print(f"bcrm: {error}", file=sys.stderr)
        return EXIT_BAD_OPTION

    setup_logging(
        debug=options.debug,
        trace=options.trace,
        log_dir=settings.get_path("log_dir"),
    )
    log = LoggerFactory.for_system()

    try:
        with operation_context(
            "preflight",
            source_path=options.source,
            destination_path=options.destination,
        ):
            result = validate_targets(options)
    except ValidationError as error:
        print(error, file=sys.stderr)
        return EXIT_VALIDATION_FAILED
    except UnexpectedIOError as error:
        log.opt(exception=error).critical(f"Aborting: {error}")
        print(error, file=sys.stderr)
        return EXIT_UNEXPECTED_IO

    if not options.quiet:
        print(
            f"{result.operation.value}: "
            f"{result.source.path} -> {result.destination.path}"
        )
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
