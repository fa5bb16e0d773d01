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
ebook_cli.py - Command line entry point
=======================================

Builds an EPUB from a YAML book definition:

    $ ebook-cli book.yml -o dist
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Sequence

from .cli_parser import create_parser
from .cli_setup import setup_configuration, setup_logging
from .common_print_utils import print_table, safe_print
from .epub_media import data_uri_to_bytes, is_data_uri
from .epub_utils import create_epub_from_definition, load_book_definition
from .epub_validation import PackagingError, ValidationError


def _archived_size(content: str | bytes) -> int:
    """Number of bytes the entry occupies once decoded, before compression."""
    if isinstance(content, bytes):
        return len(content)
    if is_data_uri(content):
        return len(data_uri_to_bytes(content)[0])
    return len(content.encode("utf-8"))


def _list_files(definition: Path, defaults: dict) -> None:
    document = load_book_definition(definition, defaults=defaults)
    rows = []
    for entry in document.get_files_for_epub():
        level = "" if entry.level is None else str(entry.level)
        rows.append([entry.path, entry.compression.value, level, str(_archived_size(entry.content))])
    print_table(f"Files for {document.metadata.title}", ["Path", "Compression", "Level", "Size"], rows)


def main(argv: Sequence[str] | None = None) -> None:
    """Main entry point for the ebook-cli application."""
    try:
        config_manager = setup_configuration(argv)
    except ValueError as e:
        safe_print(f"[bold red]Configuration error: {e}[/bold red]")
        sys.exit(1)
    config = config_manager.config

    parser = create_parser(config)
    args = parser.parse_args(argv)
    logger = setup_logging(config, args.log_level)

    definition = Path(args.definition)
    if not definition.exists():
        logger.error(f"File not found: {definition}")
        safe_print(f"[bold red]File not found: {definition}[/bold red]")
        sys.exit(1)

    try:
        if args.list_files:
            _list_files(definition, config_manager.metadata_defaults())
            return
        path = create_epub_from_definition(definition, Path(args.output_dir), args.name, config_manager)
    except (ValidationError, PackagingError, ValueError) as e:
        logger.error(str(e))
        safe_print(f"[bold red]{e}[/bold red]")
        sys.exit(1)

    safe_print(f"[bold green]EPUB created: {path}[/bold green]")


if __name__ == "__main__":
    main()
