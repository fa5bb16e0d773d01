#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright 2025 Emasoft
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
cli_parser.py - Command-line argument parsing for the ebook generator
=====================================================================

Provides the argument parser configuration and help text for ebook-cli.
"""

from __future__ import annotations

import argparse
from typing import Any

EPILOG = """
examples:
  Build an EPUB next to the current directory:
    $ ebook-cli book.yml

  Write to a folder under a custom name:
    $ ebook-cli book.yml -o dist --name my-book

  Show the files that would be archived:
    $ ebook-cli book.yml --list-files
"""


def create_parser(config: dict[str, Any]) -> argparse.ArgumentParser:
    """Create the argument parser.

    Args:
        config: Configuration dictionary for default values

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        prog="ebook-cli",
        description="Generate an EPUB 3 ebook from a YAML book definition.",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("definition", type=str, help="Path to the YAML book definition")
    parser.add_argument(
        "-o",
        "--output-dir",
        type=str,
        default=config["epub"]["output_dir"],
        help=f"Directory the EPUB is written to (default: {config['epub']['output_dir']})",
    )
    parser.add_argument("--name", type=str, help="EPUB file name without extension (default: the book title)")
    parser.add_argument(
        "--config",
        type=str,
        default="ebook_config.yml",
        help="Path to configuration file (default: ebook_config.yml)",
    )
    parser.add_argument(
        "--list-files",
        action="store_true",
        help="List the files of the EPUB instead of writing it",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help=f"Logging level (default: {config['logging']['level']})",
    )
    return parser
