"""Flask CLI commands that export calendar data as JSON files."""

import json
from pathlib import Path

import click

from .liturgical import InvalidInput

README_TEMPLATE = """# Liturgical Calendar Data Files

This directory contains JSON data for the Roman Catholic liturgical calendar
of the `{region}` region:

- **{feasts_file}**: effective fixed-date feasts (general table with the
  regional overlay applied)
- **moveable_feasts.json**: feasts counted in days from Easter Sunday

## Fixed feast records

```
{{
  "month": 7,
  "day": 3,
  "name": "Saint Thomas the Apostle",
  "localized_name": "",
  "type": "Solemnity",
  "rank": 3.1,        // lower is more important
  "color": "white",
  "isRegional": true
}}
```

## Season codes

Days without a feast are named by a season code `<prefix><week>-<weekday><day>`:

- "OWxx-yDdd": Ordinary Time, week xx, day y (e.g. "OW14-3Wed" is Wednesday of week 14)
- "AWxx-yDdd": Advent, week xx, day y
- "CWxx-yDdd": Christmas, week xx, day y
- "LWxx-yDdd": Lent, week xx, day y
- "EWxx-yDdd": Easter, week xx, day y

The weekday digit y counts Sunday as 0 and Saturday as 6.
"""


def _write_json(path, payload):
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(payload, f, ensure_ascii=False, indent=2)
        f.write("\n")


def register_commands(app):
    from . import current_resolver

    @app.cli.command("export-year")
    @click.argument("year", type=int)
    @click.option("--region", default=None, help="Region overlay (default: configured default region).")
    @click.option("--output", type=click.Path(dir_okay=False, path_type=Path), default=None,
                  help="Write to this file instead of stdout.")
    def export_year(year, region, output):
        """Export the resolved liturgical calendar of YEAR as JSON."""
        resolver = current_resolver()
        region = resolver.normalize_region(region or app.config["CALENDAR_DEFAULT_REGION"])
        try:
            days = resolver.full_year(year, region)
        except InvalidInput as exc:
            raise click.BadParameter(str(exc), param_hint="YEAR") from exc

        payload = {
            "year": year,
            "region": region,
            "anchors": resolver.anchors(year).as_dict(),
            "liturgicalCalendar": [info.as_dict() for info in days],
        }
        if output is None:
            click.echo(json.dumps(payload, ensure_ascii=False, indent=2))
            return
        _write_json(output, payload)
        app.logger.info("Exported %s calendar for %s to %s", region, year, output)
        click.echo(f"Calendar for {year} ({region}) saved to {output}")

    @app.cli.command("export-feasts")
    @click.option("--region", default=None, help="Region overlay (default: configured default region).")
    @click.option("--output-dir", type=click.Path(file_okay=False, path_type=Path), default=Path("data"),
                  show_default=True)
    def export_feasts(region, output_dir):
        """Export the effective feast tables of a region with a README."""
        resolver = current_resolver()
        region = resolver.normalize_region(region or app.config["CALENDAR_DEFAULT_REGION"])
        registry = resolver.registry(region)

        feasts_file = f"fixed_feasts_{region}.json"
        _write_json(output_dir / feasts_file, [record.as_dict() for record in registry.fixed_records()])
        _write_json(
            output_dir / "moveable_feasts.json",
            [
                {
                    "offset": record.offset,
                    "name": record.name,
                    "type": record.feast_type.value,
                    "rank": record.rank,
                    "color": record.color,
                }
                for record in registry.moveable_records()
            ],
        )
        (output_dir / "README.md").write_text(
            README_TEMPLATE.format(region=region, feasts_file=feasts_file), encoding="utf-8"
        )
        if registry.degraded:
            click.echo(f"Warning: feast tables for {region} are degraded; exported the minimal set.", err=True)
        click.echo(f"Feast tables for {region} saved to {output_dir}")
