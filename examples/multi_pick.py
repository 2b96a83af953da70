"""Multi pick: toggle several tasks, with descriptions under the cursor."""

import asyncio

from box_picker import multi_pick_box


async def main() -> None:
    result = await multi_pick_box(
        question="Select tasks to run",
        choices={
            "b": {"value": "Build", "description": "Compile the project"},
            "t": {"value": "Test", "description": "Run unit tests"},
            "l": {"value": "Lint", "description": "Run lint checks"},
        },
        border_style="double",
        description_display="selected",
        show_footer_hint=True,
    )
    print("Selected values:", ", ".join(result.values))


if __name__ == "__main__":
    asyncio.run(main())
