import rich_click as click


def configure_rich_click(brand_color: str) -> None:
    click.rich_click.USE_RICH_MARKUP = True
    click.rich_click.USE_MARKDOWN = False
    click.rich_click.SHOW_ARGUMENTS = True
    click.rich_click.GROUP_ARGUMENTS_OPTIONS = True
    click.rich_click.STYLE_ERRORS_SUGGESTION = "dim italic"
    click.rich_click.ERRORS_SUGGESTION = (
        "Try running the '--help' flag for more information."
    )
    click.rich_click.ERRORS_EPILOGUE = ""

    click.rich_click.STYLE_OPTION = f"dim {brand_color}"
    click.rich_click.STYLE_ARGUMENT = f"dim {brand_color}"
    click.rich_click.STYLE_COMMAND = f"bold {brand_color}"
    click.rich_click.STYLE_SWITCH = "bold green"
    click.rich_click.STYLE_METAVAR = "bold yellow"
    click.rich_click.STYLE_USAGE = "bold"
    click.rich_click.STYLE_USAGE_COMMAND = f"bold dim {brand_color}"
    click.rich_click.STYLE_HELPTEXT_FIRST_LINE = "white italic"
    click.rich_click.STYLE_HELPTEXT = ""
    click.rich_click.ALIGN_OPTIONS_PANEL = "left"
    click.rich_click.MAX_WIDTH = 100

    store_options = [
        {
            "name": "App Identity",
            "options": ["--platform", "--app-id", "--local-version"],
        },
        {
            "name": "Store Lookup",
            "options": [
                "--config",
                "--ios-id",
                "--android-id",
                "--country",
                "--locale",
                "--force-version",
                "--show-changelog",
                "--timeout",
            ],
        },
    ]
    click.rich_click.OPTION_GROUPS = {
        "storeversion status": store_options + [
            {"name": "Output", "options": ["--json"]},
        ],
        "storeversion prompt": store_options + [
            {
                "name": "Dialog",
                "options": [
                    "--title",
                    "--text",
                    "--update-label",
                    "--dismiss-label",
                    "--no-dismiss",
                    "--external",
                ],
            },
        ],
    }

    click.rich_click.COMMAND_GROUPS = {
        "storeversion": [
            {
                "name": "Version Check",
                "commands": ["status", "prompt"],
            },
            {
                "name": "Utilities",
                "commands": ["open"],
            },
        ],
    }
