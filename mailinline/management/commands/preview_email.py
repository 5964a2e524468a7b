import email

from django.core.management.base import BaseCommand, CommandError

from mailinline import mime
from mailinline.exceptions import ConflictingDirectives
from mailinline.hook import previewing_email


class Command(BaseCommand):
    help = (
        "Process a stored message (.eml) the way it would be processed on "
        "delivery and print the result."
    )

    def add_arguments(self, parser):
        parser.add_argument(
            "path",
            help="Path to an RFC 822 message file.",
        )
        parser.add_argument(
            "--html",
            action="store_true",
            default=False,
            help="Print only the inlined HTML body instead of the whole message.",
        )
        parser.add_argument(
            "--output",
            default=None,
            help="Write the result to this file instead of stdout.",
        )

    def handle(self, *args, **options):
        path = options["path"]

        try:
            with open(path, "rb") as fp:
                message = email.message_from_binary_file(fp)
        except OSError as exc:
            raise CommandError(f"Could not read '{path}': {exc}")

        try:
            previewing_email(message)
        except ConflictingDirectives as exc:
            raise CommandError(str(exc))

        if options["html"]:
            html_part = mime.find_part(message, "text/html")
            if html_part is None:
                raise CommandError(f"'{path}' has no HTML body.")
            output = mime.read_text(html_part)
        else:
            output = message.as_string()

        if options["output"]:
            with open(options["output"], "w", encoding="utf-8") as fp:
                fp.write(output)
            self.stdout.write(self.style.SUCCESS(f"Preview written to {options['output']}"))
        else:
            self.stdout.write(output)
