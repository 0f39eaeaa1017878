#!/usr/bin/env python3
"""Command-line entry point to inspect, validate and export record files."""

import argparse
import sys
from typing import List, Optional

from caftruth.config import apply_overrides, load_config_file
from caftruth.errors import ValidationError
from caftruth.io import reader_factory, writer_factory
from caftruth.utils.logger import logger
from caftruth.validate import InteractionValidator
from caftruth.version import __version__


def build_config(config: Optional[str], config_overrides: Optional[List[str]]):
    """Loads the configuration and applies the command-line overrides.

    Parameters
    ----------
    config : str, optional
        Path to the configuration file
    config_overrides : List[str], optional
        List of config overrides in the form "key.path=value"

    Returns
    -------
    dict
        Configuration dictionary
    """
    cfg = load_config_file(config) if config is not None else {}
    if config_overrides:
        cfg = apply_overrides(cfg, config_overrides)

    # Set the verbosity of the logger
    base = cfg.get("base") or {}
    verbosity = base.get("verbosity", "info")
    logger.setLevel(verbosity.upper())

    return cfg


def build_reader(cfg: dict, source: List[str], n: Optional[int], nskip: Optional[int]):
    """Builds the reader from the `io.reader` block and the command line.

    Parameters
    ----------
    cfg : dict
        Configuration dictionary
    source : List[str]
        List of paths to the input files
    n : int, optional
        Number of records to load
    nskip : int, optional
        Number of records to skip

    Returns
    -------
    object
        Reader object
    """
    io_cfg = cfg.get("io") or {}
    reader_cfg = dict(io_cfg.get("reader") or {})
    reader_cfg.setdefault("name", "hdf5")

    # Override the input command-line information into the configuration
    io_mapping = {"file_keys": source, "n_entry": n, "n_skip": nskip}
    for io_key, io_value in io_mapping.items():
        if io_value is not None:
            reader_cfg[io_key] = io_value

    if "file_keys" not in reader_cfg:
        raise KeyError(
            "Must provide input files, on the command line or in `io.reader`."
        )

    return reader_factory(reader_cfg)


def dump(
    config: Optional[str],
    source: List[str],
    n: Optional[int],
    nskip: Optional[int],
    config_overrides: Optional[List[str]],
):
    """Prints the records stored in a set of files.

    Parameters
    ----------
    config : str, optional
        Path to the configuration file
    source : List[str]
        List of paths to the input files
    n : int, optional
        Number of records to print
    nskip : int, optional
        Number of records to skip
    config_overrides : List[str], optional
        List of config overrides in the form "key.path=value"

    Returns
    -------
    int
        Exit status
    """
    cfg = build_config(config, config_overrides)
    reader = build_reader(cfg, source, n, nskip)
    for idx, record in enumerate(reader):
        print(f"Entry {idx}:")
        for key, value in record.as_dict().items():
            if key in record.obj_list_attrs:
                print(f"  {key}: {len(value)} element(s)")
                for i, obj in enumerate(value):
                    print(f"    [{i}] {obj.scalar_dict()}")
            else:
                print(f"  {key}: {value}")

    return 0


def validate(
    config: Optional[str],
    source: List[str],
    n: Optional[int],
    nskip: Optional[int],
    strict: bool,
    config_overrides: Optional[List[str]],
):
    """Runs the validator on the records stored in a set of files.

    Parameters
    ----------
    config : str, optional
        Path to the configuration file
    source : List[str]
        List of paths to the input files
    n : int, optional
        Number of records to check
    nskip : int, optional
        Number of records to skip
    strict : bool
        If `True`, stop at the first record with an error-level issue
    config_overrides : List[str], optional
        List of config overrides in the form "key.path=value"

    Returns
    -------
    int
        Exit status, 1 if any error-level issue was found
    """
    cfg = build_config(config, config_overrides)
    reader = build_reader(cfg, source, n, nskip)

    validate_cfg = dict(cfg.get("validate") or {})
    if strict:
        validate_cfg["strict"] = True
    validator = InteractionValidator(**validate_cfg)

    num_errors = 0
    for idx, record in enumerate(reader):
        try:
            issues = validator(record)
        except ValidationError as err:
            logger.error("Entry %d failed strict validation.", idx)
            logger.debug("%s", err)
            return 1

        num_errors += sum(issue.level == "error" for issue in issues)

    logger.info("Found %d error(s) in %d record(s).", num_errors, len(reader))

    return int(num_errors > 0)


def to_csv(
    config: Optional[str],
    source: List[str],
    output: str,
    n: Optional[int],
    nskip: Optional[int],
    overwrite: bool,
    config_overrides: Optional[List[str]],
):
    """Exports the records stored in a set of files to a flat CSV table.

    Parameters
    ----------
    config : str, optional
        Path to the configuration file
    source : List[str]
        List of paths to the input files
    output : str
        Path to the output CSV file
    n : int, optional
        Number of records to export
    nskip : int, optional
        Number of records to skip
    overwrite : bool
        If `True`, overwrite the output file if it already exists
    config_overrides : List[str], optional
        List of config overrides in the form "key.path=value"

    Returns
    -------
    int
        Exit status
    """
    cfg = build_config(config, config_overrides)
    reader = build_reader(cfg, source, n, nskip)

    # Only the CSV writer parameters of the configuration are relevant here
    io_cfg = cfg.get("io") or {}
    writer_cfg = dict(io_cfg.get("writer") or {})
    if writer_cfg.get("name", "csv") != "csv":
        writer_cfg = {}
    writer_cfg["name"] = "csv"
    writer_cfg["file_name"] = output
    if overwrite:
        writer_cfg["overwrite"] = True

    writer = writer_factory(writer_cfg)
    for record in reader:
        writer(record)

    logger.info("Wrote %d record(s) to %s", len(reader), output)

    return 0


def cli(argv: Optional[List[str]] = None):
    """Main CLI entry point.

    Parameters
    ----------
    argv : List[str], optional
        Command-line arguments, defaults to `sys.argv[1:]`

    Returns
    -------
    int
        Exit status
    """
    parser = argparse.ArgumentParser(
        prog="caftruth",
        description="Inspect, validate and export true interaction records",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  caftruth dump file.h5 -n 5                        Print the first 5 records
  caftruth validate file_*.h5 --strict              Stop at the first error
  caftruth csv file.h5 -o out.csv --overwrite       Export a flat table
  caftruth validate file.h5 -c cfg.yaml --set validate.check_lepton=false
""",
    )

    parser.add_argument(
        "--version", "-v", action="version", version=f"caftruth {__version__}"
    )

    # Arguments shared by all the sub-commands
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("source", nargs="+", help="List of paths to the input files")
    common.add_argument("-c", "--config", help="Path to the configuration file")
    common.add_argument(
        "-n", "--n-entry", type=int, help="Number of records to process"
    )
    common.add_argument("--nskip", type=int, help="Number of records to skip")
    common.add_argument(
        "--set",
        action="append",
        dest="config_overrides",
        metavar="KEY=VALUE",
        help="Override any config parameter using dot notation "
        "(e.g., --set validate.strict=true). "
        "Can be used multiple times for multiple overrides.",
    )

    subparsers = parser.add_subparsers(dest="command")
    subparsers.add_parser("dump", parents=[common], help="Print records")

    validate_parser = subparsers.add_parser(
        "validate", parents=[common], help="Check records against conventions"
    )
    validate_parser.add_argument(
        "--strict", action="store_true", help="Stop at the first error"
    )

    csv_parser = subparsers.add_parser(
        "csv", parents=[common], help="Export records to a CSV file"
    )
    csv_parser.add_argument(
        "-o", "--output", required=True, help="Path to the output file"
    )
    csv_parser.add_argument(
        "--overwrite", action="store_true", help="Overwrite the output file"
    )

    # Parse the arguments
    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help()
        return 0

    if args.command == "dump":
        return dump(
            config=args.config,
            source=args.source,
            n=args.n_entry,
            nskip=args.nskip,
            config_overrides=args.config_overrides,
        )

    if args.command == "validate":
        return validate(
            config=args.config,
            source=args.source,
            n=args.n_entry,
            nskip=args.nskip,
            strict=args.strict,
            config_overrides=args.config_overrides,
        )

    return to_csv(
        config=args.config,
        source=args.source,
        output=args.output,
        n=args.n_entry,
        nskip=args.nskip,
        overwrite=args.overwrite,
        config_overrides=args.config_overrides,
    )


def main():
    """Console script entry point, exits with the status of the command."""
    sys.exit(cli())


if __name__ == "__main__":
    main()
