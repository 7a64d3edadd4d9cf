"""
Command-line interface for preferred-browser
"""

import sys
import argparse
import json
from typing import Optional, List

from . import __version__
from .config import Config, OpenConfig
from .detector import DefaultBrowserDetector
from .exceptions import PreferredBrowserException
from .launcher import BrowserLauncher
from .selector import BrowserSelector
from .terminal import Terminal


class CLI:
    """Command-line interface handler"""

    def __init__(self):
        self.config = Config()
        self.detector = DefaultBrowserDetector()
        self.launcher = BrowserLauncher()
        self.selector = BrowserSelector(detector=self.detector, launcher=self.launcher)

    def run(self, args: Optional[List[str]] = None) -> int:
        """Run CLI with arguments"""
        parser = self._create_parser()

        if args is None:
            args = sys.argv[1:]

        if not args:
            parser.print_help()
            return 1

        parsed_args = parser.parse_args(args)
        Terminal.set_color_mode(Terminal.parse_color_mode(parsed_args.color))

        if not hasattr(parsed_args, "func"):
            parser.print_help()
            return 1

        try:
            return parsed_args.func(parsed_args)
        except PreferredBrowserException as e:
            print(Terminal.error(f"Error: {e}"), file=sys.stderr)
            return 1
        except KeyboardInterrupt:
            print("\nAborted", file=sys.stderr)
            return 130

    def _create_parser(self) -> argparse.ArgumentParser:
        """Create argument parser"""
        parser = argparse.ArgumentParser(
            prog='prefbrowser',
            description='Open URLs in a preferred web browser',
        )

        parser.add_argument('--version', action='version',
                            version=f'prefbrowser v{__version__}')
        parser.add_argument('--color', choices=['auto', 'never', 'always'],
                            default='auto', help='Color output mode')

        subparsers = parser.add_subparsers(dest='command', help='Commands')

        # Open
        open_parser = subparsers.add_parser('open', help='Open a URL')
        open_parser.add_argument('url', help='URL to open')
        open_parser.add_argument('--browser', '-b', action='append', dest='browsers',
                                 metavar='NAME',
                                 help='Preferred browser, repeat in order of preference')
        open_parser.add_argument('--verbose', '-v', action='store_true',
                                 help='Explain which browser is chosen')
        open_parser.set_defaults(func=self.cmd_open)

        # List
        list_parser = subparsers.add_parser('list', help='List installed browsers')
        list_parser.add_argument('--json', action='store_true', help='Output JSON')
        list_parser.set_defaults(func=self.cmd_list)

        # Default
        default_parser = subparsers.add_parser('default', help='Show the default browser')
        default_parser.add_argument('--json', action='store_true', help='Output JSON')
        default_parser.set_defaults(func=self.cmd_default)

        # Config
        config_parser = subparsers.add_parser('config', help='Manage saved defaults')
        config_parser.add_argument('action', choices=['get', 'set', 'unset'])
        config_parser.add_argument('key', choices=['preferred_browsers', 'verbose'])
        config_parser.add_argument('value', nargs='?',
                                   help='Comma separated names, or 1/0 for verbose')
        config_parser.set_defaults(func=self.cmd_config)

        return parser

    def _build_open_config(self, args) -> OpenConfig:
        open_config = self.config.get_open_config()
        if args.browsers:
            open_config.preferred_browsers = list(args.browsers)
        if args.verbose:
            open_config.verbose = True
        return open_config

    def cmd_open(self, args) -> int:
        """Handle open command"""
        result = self.selector.open(args.url, self._build_open_config(args),
                                    callback=lambda error, message, extra: None)

        if not result.ok:
            print(Terminal.error(f"Error: {result.error}"), file=sys.stderr)
            return 1

        if result.command:
            print(Terminal.success(result.message))
        else:
            print(Terminal.success(f"Opened {args.url} in the default browser"))
        return 0

    def cmd_list(self, args) -> int:
        """Handle list command"""
        browsers = self.launcher.detect_available()

        if args.json:
            print(json.dumps([b.to_dict() for b in browsers], indent=2))
            return 0

        if not browsers:
            print("No supported browsers found", file=sys.stderr)
            return 1

        for browser in browsers:
            name = Terminal.header(browser.name)
            version = browser.version or "unknown"
            print(f"{name} {version} ({browser.type}) {Terminal.info(browser.command)}")
        return 0

    def cmd_default(self, args) -> int:
        """Handle default command"""
        info = self.detector.detect()

        if args.json:
            print(json.dumps(info.to_dict(), indent=2))
        else:
            print(f"{Terminal.header(info.common_name)} ({info.identifier})")
        return 0

    def cmd_config(self, args) -> int:
        """Handle config command"""
        if args.action == 'get':
            value = self.config.get(args.key)
            if value is None:
                return 1
            if isinstance(value, list):
                value = ",".join(value)
            print(value)
            return 0

        if args.action == 'unset':
            self.config.delete(args.key)
            return 0

        if args.value is None:
            print("Error: a value is required", file=sys.stderr)
            return 1

        if args.key == 'preferred_browsers':
            names = [name.strip() for name in args.value.split(",") if name.strip()]
            if not names:
                print("Error: at least one browser name is required", file=sys.stderr)
                return 1
            self.config.set(args.key, names)
        else:
            self.config.set(args.key, args.value.lower() in ('1', 'true', 'yes', 'on'))
        return 0


def main():
    """Main entry point"""
    cli = CLI()
    sys.exit(cli.run())


if __name__ == '__main__':
    main()
