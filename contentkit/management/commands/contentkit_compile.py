"""
Management command to run the content compiler on files.

Parses an HTML file into JSON blocks, or renders a JSON blocks file into HTML.
"""

import json
from pathlib import Path

from django.core.exceptions import ValidationError
from django.core.management.base import BaseCommand, CommandError

from contentkit.compiler.config import get_default_compiler
from contentkit.validators import validate_blocks


class Command(BaseCommand):
    help = "Parse an HTML file into blocks, or render a blocks JSON file into HTML"

    def add_arguments(self, parser):
        group = parser.add_mutually_exclusive_group(required=True)
        group.add_argument(
            '--parse',
            type=str,
            metavar='FILE',
            help='HTML file to parse into JSON blocks',
        )
        group.add_argument(
            '--render',
            type=str,
            metavar='FILE',
            help='JSON blocks file to render into HTML',
        )
        parser.add_argument(
            '--indent',
            type=int,
            default=None,
            help='Indent the JSON output by this many spaces',
        )

    def handle(self, *args, **options):
        compiler = get_default_compiler()

        if options.get('parse'):
            html = self._read(options['parse'])
            blocks = [block.to_dict() for block in compiler.parse(html)]
            self.stdout.write(json.dumps(blocks, indent=options.get('indent')))
            return

        source = self._read(options['render'])
        try:
            blocks = json.loads(source)
        except json.JSONDecodeError as e:
            raise CommandError(f"Invalid JSON in {options['render']}: {e}")
        try:
            validate_blocks(blocks)
        except ValidationError as e:
            raise CommandError(" ".join(e.messages))
        self.stdout.write(compiler.render(blocks))

    def _read(self, filename):
        path = Path(filename)
        if not path.is_file():
            raise CommandError(f"File not found: {filename}")
        return path.read_text(encoding='utf-8')
