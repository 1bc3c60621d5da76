#!/usr/bin/env python3
"""
Command-line entry point
========================
Launches a persistent-profile Chromium, runs one login attempt and exits
with a status that reflects the outcome:

    0  authenticated (fresh login or existing session)
    1  failed (missing credentials, form problem, rejected, browser closed)
    2  timed out (e.g. a checkpoint was never completed)

Credentials come from ``LINKEDIN_EMAIL`` / ``LINKEDIN_PASSWORD`` (a ``.env``
file next to the package or in the CWD is loaded first), or from an
interactive prompt with ``--interactive``.

Run with: python -m login_agent
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from .auth.base_auth import Credentials, Outcome, prompt_credentials
from .auth.login_manager import AttemptReport, LoginManager
from .auth.policy import LoginPolicy
from .run_config import LoginRunConfig

logger = logging.getLogger(__name__)

EXIT_CODES = {
    Outcome.AUTHENTICATED: 0,
    Outcome.FAILED: 1,
    Outcome.TIMED_OUT: 2,
}


def _load_env_file() -> None:
    env_path = Path(__file__).resolve().parent.parent / '.env'
    if env_path.exists():
        load_dotenv(env_path)
    else:
        load_dotenv()  # tries CWD


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(asctime)s | %(levelname)s | %(message)s',
        datefmt='%H:%M:%S'
    )


def _wait_for_enter() -> str:
    """Block until the user presses Enter."""
    try:
        return input("  Press ENTER to close the browser → ")
    except (EOFError, KeyboardInterrupt):
        return ""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='login-agent',
        description='Log into a web session through a persistent Chromium profile',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m login_agent                          # env credentials, headed browser
  python -m login_agent --interactive            # prompt for missing credentials
  python -m login_agent --max-checks 40 --poll-interval 5 --keep-open
        """
    )
    parser.add_argument('--login-url', type=str, metavar='URL',
                        help='Login page URL (default: LinkedIn)')
    parser.add_argument('--max-checks', type=int,
                        help='Post-submit location checks before timing out (default: 25)')
    parser.add_argument('--poll-interval', type=float, metavar='SECONDS',
                        help='Delay before each check (default: 3.0)')
    parser.add_argument('--grace-checks', type=int,
                        help='Early checks where the login page is not yet a failure (default: 5)')
    parser.add_argument('--settle-delay', type=float, metavar='SECONDS',
                        help='Pause after each field fill (default: 0.4)')
    parser.add_argument('--profile-dir', type=str, metavar='PATH',
                        help='Persistent Chromium profile directory (default: chrome-profile)')
    parser.add_argument('--headless', action='store_true',
                        help='Run without a visible window (checkpoints cannot be solved)')
    parser.add_argument('--interactive', action='store_true',
                        help='Prompt for credentials missing from the environment')
    parser.add_argument('--keep-open', action='store_true',
                        help='Keep the browser open until ENTER is pressed')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Debug logging')
    return parser


def run_login(cfg: LoginRunConfig, creds: Credentials, policy: LoginPolicy,
              keep_open: bool = False) -> AttemptReport:
    """Launch the browser, run one attempt with *policy*, close the browser."""
    from .browser.playwright_driver import BrowserSession

    with BrowserSession(**cfg.to_session_kwargs()) as session:
        manager = LoginManager(session.driver, policy)
        report = manager.run_attempt(creds)
        if keep_open:
            _wait_for_enter()
    return report


def print_summary(report: AttemptReport) -> None:
    """Print attempt summary."""
    print("\n" + "=" * 65)
    print("LOGIN ATTEMPT COMPLETE")
    print("=" * 65)
    print(f"  Outcome:          {report.outcome.value}")
    print(f"  Reason:           {report.reason}")
    print(f"  Checks used:      {report.checks_used}")
    if report.checkpoint_seen:
        print("  Checkpoint:       seen")
    if report.last_location:
        print(f"  Last location:    {report.last_location[:80]}")
    print("=" * 65)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    _load_env_file()
    _configure_logging(args.verbose)

    cfg = LoginRunConfig.from_cli_args(args, base=LoginRunConfig.from_env())
    cfg.log_summary()

    # Range checks run before any browser is launched
    try:
        policy = cfg.to_policy()
    except ValueError as exc:
        logger.error(f"Invalid login configuration: {exc}")
        return EXIT_CODES[Outcome.FAILED]

    creds = Credentials.from_env(
        identifier_var=cfg.identifier_var, secret_var=cfg.secret_var
    )
    if args.interactive:
        creds = prompt_credentials(creds)

    report = run_login(cfg, creds, policy, keep_open=args.keep_open)
    print_summary(report)
    return EXIT_CODES[report.outcome]


if __name__ == '__main__':
    sys.exit(main())
