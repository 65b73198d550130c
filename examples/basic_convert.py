#!/usr/bin/env python3
"""Example: load a project file, look at one panel's joins, then write its CSV map."""

import sys

from panel_joinmap import ConvertOptions, JoinMapConverter
from panel_joinmap.errors import InputUnreadableError, ModelNotFoundError, ZeroCountError


def main() -> None:
    project = sys.argv[1] if len(sys.argv) > 1 else "Lobby.smw"  # change to your project file
    model = "TSW-760"

    try:
        converter = JoinMapConverter.from_file(project)
        print(f"{len(converter.signals)} signals, {len(converter.addresses)} device addresses")

        # Peek at the joins of every matching block
        for block in converter.blocks(model):
            address = converter.address_for(block) or "-"
            print(f"{model} #{block.instance} (address {address}): {block.counts}")
            for row in converter.rows_for(block)[:5]:
                print(f"  {row.direction.value:<6} {row.signal_type.value:<8} {row.number:>4}  {row.signal_name}")

        # Write <project>_<model>[_<address>]_signal_map.csv next to the project
        result = converter.convert(ConvertOptions(model=model, require_model=True))
        for outcome in result.written:
            print(f"wrote {outcome.rows} rows to {outcome.path}")
    except InputUnreadableError as e:
        print(f"Cannot read project: {e}", file=sys.stderr)
        sys.exit(1)
    except (ModelNotFoundError, ZeroCountError) as e:
        print(f"Extraction failed: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
