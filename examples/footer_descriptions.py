"""Footer descriptions: fixed width box, descriptions below the choices."""

import asyncio

from box_picker import pick_box


async def main() -> None:
    result = await pick_box(
        question="Which environment should we deploy to?\nChoose carefully.",
        choices=[
            {
                "value": "dev",
                "label": "Development",
                "description": "Shared sandbox, reset nightly",
            },
            {
                "value": "staging",
                "label": "Staging",
                "description": "Mirror of production data",
            },
            {"value": "prod", "label": "Production", "description": "Customer facing"},
        ],
        description_display="always",
        description_placement="footer",
        selected_color="bold magenta",
        box_width=40,
    )
    print(f"Deploying to {result.value} (choice #{result.index + 1})")


if __name__ == "__main__":
    asyncio.run(main())
