"""Pick: single choice with mapping hotkeys."""

import asyncio

from box_picker import pick_box


async def main() -> None:
    result = await pick_box(
        question="What are you doing now?",
        choices={
            "c": "Coding",
            "r": "Reviewing",
            "s": "Sleeping",
        },
        border_style="round",
    )
    print("You selected:", result.value)


if __name__ == "__main__":
    asyncio.run(main())
