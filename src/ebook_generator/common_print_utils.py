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
Common print utilities for console output with rich formatting.
"""

from typing import Any

from rich.console import Console
from rich.table import Table

console = Console()


def safe_print(*args: Any, **kwargs: Any) -> None:
    """Print through rich so that [bold]markup[/bold] is rendered.

    Args:
        *args: Arguments to print
        **kwargs: Keyword arguments for Console.print
    """
    console.print(*args, **kwargs)


def print_table(title: str, columns: list[str], rows: list[list[str]]) -> None:
    """Print rows as a rich table.

    Args:
        title: Table caption
        columns: Column headers
        rows: One list of cell strings per row
    """
    table = Table(title=title)
    for column in columns:
        table.add_column(column)
    for row in rows:
        table.add_row(*row)
    console.print(table)
