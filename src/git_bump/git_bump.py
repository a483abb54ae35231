"""git-bump

Consistently bump version numbers with Lua scripts.

Usage:
    git-bump [options] <version>
    git-bump [options] --list-files
    git-bump --print-sample-config
    git-bump (-h | --help)
    git-bump --version

Options:
    -h --help               show this screen.
    --version               show version.
    -l --list-files         list the files that would be bumped.
    --print-sample-config   print a sample config file.
    --log-level=<level>     logging level (DEBUG, INFO, WARNING, ERROR).
    --no-color              plain output without colors.
    --trailing-newline      append a newline to new content lacking one.
    --allow-missing-config  do nothing instead of failing when no config file exists.

Config files are read from ~/.git-bump.lua, $GIT_DIR/git-bump.lua and
$GIT_WORK_TREE/.git-bump.lua, in that order; later files override mappings
of earlier ones.
"""

import sys

from docopt import docopt

from git_bump import __version__
from . import config, locations, reporter
from .engine import BumpEngine
from .errors import BumpError, NoConfigFoundError
from .lua_runtime import ScriptRuntime
from .settings import Settings, conf_get, create_settings, parse_env_overrides
from .sinks import ProgressSink
from .util import log

version = __version__


def parse_cli_overrides(arguments) -> dict:
    """Settings given on the command line; absent flags leave lower layers alone."""
    overrides = {}
    if arguments.get("--log-level"):
        overrides[Settings.LOG_LEVEL.key] = arguments["--log-level"].upper()
    if arguments.get("--no-color"):
        overrides[Settings.COLORIZE.key] = False
    if arguments.get("--trailing-newline"):
        overrides[Settings.TRAILING_NEWLINE.key] = True
    if arguments.get("--allow-missing-config"):
        overrides[Settings.REQUIRE_CONFIG.key] = False
    return overrides


def configure_logging(settings):
    log.use_colors(conf_get(settings, Settings.COLORIZE))
    log.set_default_level(conf_get(settings, Settings.LOG_LEVEL))


def load_effective_mapping(repository, settings, runtime):
    config_files = locations.resolve(locations.candidate_paths(repository))
    if not config_files:
        if conf_get(settings, Settings.REQUIRE_CONFIG):
            raise NoConfigFoundError()
        log.debug("No config files found, nothing to do.")
        return {}
    return config.load_effective_mapping(runtime, [c.path for c in config_files])


def list_files(effective, repository):
    for path in reporter.list_targets(effective, repository.root):
        print(path)
    return True


def bump(effective, repository, settings, runtime, new_version):
    engine = BumpEngine(
        runtime,
        repository.root,
        trailing_newline=conf_get(settings, Settings.TRAILING_NEWLINE),
    )
    renderer = "rich" if conf_get(settings, Settings.COLORIZE) else "plain"
    sink = ProgressSink(renderer).install()
    try:
        reports = engine.run(effective, new_version)
    finally:
        sink.close()

    for report in reports:
        if report.error is not None:
            log.error(f"Error: {log.escape(report.error)}")
    return BumpEngine.succeeded(reports)


def run(argv=None):
    arguments = docopt(__doc__, argv=argv, version=f"git-bump {version}")

    if arguments.get("--print-sample-config"):
        print(reporter.sample_config(), end="")
        return True

    try:
        settings = create_settings(parse_cli_overrides(arguments), parse_env_overrides())
        configure_logging(settings)
        repository = locations.discover_repository()
        # every script and callable of this run lives in this one runtime
        runtime = ScriptRuntime()
        effective = load_effective_mapping(repository, settings, runtime)

        if arguments.get("--list-files"):
            return list_files(effective, repository)
        return bump(effective, repository, settings, runtime, arguments.get("<version>"))
    except (BumpError, ValueError) as e:
        log.error(f"Error: {log.escape(e)}")
        return False


def run_git_bump():
    result = run()
    if not result:
        sys.exit(1)
    else:
        sys.exit(0)


if __name__ == "__main__":
    run_git_bump()
