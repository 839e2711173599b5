"""
Command-line interface for the samplebench benchmarking harness.

Runs every sample once in its own child process, writes the report and logs
a summary. Command-line options override values from the configuration
file, which override the built-in defaults.

Exit codes:
    0    all samples were run and the report was written (individual samples
         may still have failed or timed out; they are marked in the report)
    1    invalid configuration or arguments
    2    a measurement process could not be spawned
    3    the report could not be written
    130  interrupted
"""

import argparse
import logging
import sys
import tomllib
from pathlib import Path
from typing import List, Optional

from ..config import get_config, set_config_path, validate_sample_list
from ..models.config import MEMORY_PROBES, REPORT_FORMATS
from ..orchestration import SignalHandler, build_pipeline, log_report_summary, write_report
from ..storage import create_report_writer
from ..validation import (
    MeasurementEnvironmentError,
    ReportWriteError,
    ValidationError,
    handle_cli_error,
    validate_executable,
)

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_CONFIG_ERROR = 1
EXIT_ENVIRONMENT_ERROR = 2
EXIT_REPORT_ERROR = 3
EXIT_INTERRUPTED = 130

LOG_FORMAT = "%(asctime)s [%(levelname)-5.5s] %(name)s:%(filename)s:%(lineno)d\t %(message)s"


def setup_logging(verbose: bool = False) -> None:
    """Configure root logging to stdout; DEBUG when verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="samplebench",
        description="Benchmark sample programs in isolated processes and write a CSV report.",
    )
    parser.add_argument(
        "--samples",
        type=Path,
        help="Directory containing the sample programs.",
    )
    parser.add_argument(
        "--out",
        type=Path,
        help="Destination report file. Its parent directory must exist.",
    )
    parser.add_argument(
        "--timeout",
        type=int,
        metavar="MS",
        help="Per-sample time limit in milliseconds.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to a config.toml file (default: conf/config.toml).",
    )
    parser.add_argument(
        "--pattern",
        type=str,
        help="File name glob used to discover samples (default: *.py).",
    )
    parser.add_argument(
        "--sample",
        dest="sample_names",
        action="append",
        metavar="NAME",
        help="Run only this sample file; repeat to list several, in order.",
    )
    parser.add_argument(
        "--probe",
        choices=list(MEMORY_PROBES),
        help="Memory probe used inside each sample process.",
    )
    parser.add_argument(
        "--format",
        choices=list(REPORT_FORMATS),
        help="Report format (default: csv).",
    )
    parser.add_argument(
        "--interpreter",
        type=str,
        help="Python interpreter used to run the samples (default: the current one).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging, including each sample's output.",
    )
    return parser


def main_cli(argv: Optional[List[str]] = None) -> None:
    """
    Main command-line interface for samplebench.

    Raises:
        SystemExit: With a non-zero code on configuration, environment or
            report errors, or when interrupted.
    """
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    if args.config:
        set_config_path(args.config)

    try:
        app_config = get_config()
        if args.interpreter:
            validate_executable(args.interpreter, field_name="--interpreter")
        if args.sample_names:
            validate_sample_list(args.sample_names, field_name="--sample")
    except (ValidationError, FileNotFoundError, tomllib.TOMLDecodeError) as e:
        handle_cli_error(
            error=e,
            context="configuration loading",
            exit_code=EXIT_CONFIG_ERROR,
            logger=logger,
        )

    app_config = app_config.with_overrides(
        benchmark={
            "samples_dir": args.samples,
            "pattern": args.pattern,
            "samples": args.sample_names,
            "timeout_ms": args.timeout,
            "interpreter": args.interpreter,
            "memory_probe": args.probe,
        },
        report={
            "output_file": args.out,
            "format": args.format,
        },
    )
    report_config = app_config.report
    writer = create_report_writer(report_config.format, report_config.compression)

    with SignalHandler():
        try:
            pipeline = build_pipeline(app_config)
            report = pipeline.run()
            destination = write_report(report, report_config.output_file, writer)
        except ValidationError as e:
            handle_cli_error(e, "benchmark setup", exit_code=EXIT_CONFIG_ERROR, logger=logger)
        except MeasurementEnvironmentError as e:
            handle_cli_error(e, "sample execution", exit_code=EXIT_ENVIRONMENT_ERROR, logger=logger)
        except ReportWriteError as e:
            handle_cli_error(e, "report writing", exit_code=EXIT_REPORT_ERROR, logger=logger)
        except KeyboardInterrupt:
            logger.warning("Benchmark run interrupted; no report written.")
            sys.exit(EXIT_INTERRUPTED)

    log_report_summary(report, logger)
    logger.info(f"Benchmarking complete. Results saved to {destination}")


if __name__ == "__main__":
    main_cli()
