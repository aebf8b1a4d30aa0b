# main.py
import argparse
import asyncio
import logging
import re
import sys

from .artifacts import save_page_object
from .browser import BrowserSession
from .codegen import generate_page_object_metadata
from .config import load_config_file
from .constants import NAMING_CONVENTIONS
from .errors import PageObjectError

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Generate a Playwright page object from a live web page')
    parser.add_argument('--url', required=True, help='Page to inspect')
    parser.add_argument('--class-name', default='GeneratedPage', help='Name of the generated class')
    parser.add_argument('--output', default='generated', help='Output directory')
    parser.add_argument('--config', help='YAML configuration file')
    parser.add_argument('--container', help='Only inspect elements inside this selector')
    parser.add_argument('--naming', choices=NAMING_CONVENTIONS, help='Property naming convention')
    parser.add_argument('--all-elements', action='store_true', help='Include content elements, not only interactive ones')
    parser.add_argument('--include-hidden', action='store_true', help='Keep elements that look hidden')
    parser.add_argument('--check-visibility', action='store_true', help='Drop elements not visible at runtime')
    parser.add_argument('--no-helpers', action='store_true', help='Do not generate navigation helpers')
    parser.add_argument('--headful', action='store_true', help='Show browser')
    parser.add_argument('--verbose', action='store_true', help='Debug logging')
    return parser


def config_from_args(args: argparse.Namespace) -> dict:
    config = load_config_file(args.config) if args.config else {}
    if args.container:
        config['container_selector'] = args.container
    if args.naming:
        config['naming_convention'] = args.naming
    if args.all_elements:
        config['interactive_only'] = False
    if args.include_hidden:
        config['include_hidden_elements'] = True
    if args.check_visibility:
        config['enable_runtime_visibility_check'] = True
    if args.no_helpers:
        config['include_helpers'] = False
    return config


def file_name_for(class_name: str) -> str:
    return re.sub(r'(?<!^)(?=[A-Z])', '_', class_name).lower()


async def run(args: argparse.Namespace) -> int:
    config = config_from_args(args)
    async with BrowserSession(headful=args.headful) as session:
        page = await session.open(args.url)
        result = await generate_page_object_metadata(page, args.class_name, config)
    paths = save_page_object(result, args.output, file_name_for(args.class_name), config)
    print(paths['page_object'])
    return 0


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format='%(asctime)s %(levelname)-5s %(message)s', datefmt='%Y-%m-%d %H:%M:%S')

    try:
        return asyncio.run(run(args))
    except PageObjectError as e:
        logger.error(str(e))
        return 1


if __name__ == '__main__':
    sys.exit(main())
