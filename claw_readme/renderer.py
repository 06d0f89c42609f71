"""
claw-readme Markdown Renderer

This module turns an AnalysisResult into README.md content, or into the
JSON analysis dump. No analysis happens here; it is template formatting
over data that is already merged and sorted.

Output Structure:
    1. Title and description
    2. Badges (optional, needs a GitHub repository)
    3. Installation (global install when the package ships bin commands)
    4. Usage, with Commands and Options tables when any were found
    5. Examples
    6. Development scripts (up to three, "test" excluded)
    7. License
"""

import json
from dataclasses import dataclass
from typing import Optional

from claw_readme.schema import AnalysisResult

MAX_DEVELOPMENT_SCRIPTS = 3
EXCLUDED_SCRIPTS = {"test"}


@dataclass
class RenderOptions:
    """
    Configuration options for README rendering.

    Attributes:
        include_badges: Add shields.io badges when a GitHub repository is known
    """
    include_badges: bool = False


def _cell(text: str) -> str:
    """Escape text for a Markdown table cell."""
    return text.replace("|", "\\|").replace("\n", " ")


class ReadmeRenderer:
    """
    Renders an AnalysisResult into Markdown README content.

    Usage:
        renderer = ReadmeRenderer(result)
        readme_content = renderer.render()

        # With badges
        renderer = ReadmeRenderer(result, RenderOptions(include_badges=True))
        readme_content = renderer.render()
    """

    def __init__(
        self,
        result: AnalysisResult,
        options: Optional[RenderOptions] = None,
    ):
        self.result = result
        self.options = options or RenderOptions()
        self._sections: list[str] = []

    def render(self) -> str:
        """
        Generate the complete README content.

        Returns:
            The rendered README as a Markdown string
        """
        self._sections = []

        self._add_title_section()
        self._add_description_section()
        self._add_badges_section()
        self._add_installation_section()
        self._add_usage_section()
        self._add_commands_section()
        self._add_options_section()
        self._add_examples_section()
        self._add_development_section()
        self._add_license_section()

        return "\n".join(self._sections)

    def _add_section(self, content: str) -> None:
        """Add a section to the output."""
        if content.strip():
            self._sections.append(content)

    @staticmethod
    def _code_block(lines: list[str], language: str = "bash") -> str:
        return f"```{language}\n" + "".join(f"{line}\n" for line in lines) + "```\n"

    def _add_title_section(self) -> None:
        self._add_section(f"# {self.result.name}\n")

    def _add_description_section(self) -> None:
        self._add_section(f"{self.result.description}\n")

    def _add_badges_section(self) -> None:
        """Add license, version and stars badges if enabled and possible."""
        repository = self.result.repository
        if not self.options.include_badges or repository is None:
            return

        badges = [f"![{label}]({url})" for label, url in repository.badge_urls()]
        self._add_section("\n".join(badges) + "\n")

    def _add_installation_section(self) -> None:
        name = self.result.name
        if self.result.bin_commands:
            lines = [f"npm install -g {name}", "# or", f"npx {name}"]
        else:
            lines = [f"npm install {name}"]

        self._add_section("## Installation\n\n" + self._code_block(lines))

    def _add_usage_section(self) -> None:
        """Add the help invocation and any usage lines found in the source."""
        section = "## Usage\n\n"

        bin_commands = self.result.bin_commands
        if bin_commands:
            section += self._code_block([f"{bin_commands[0]} --help"])
            if self.result.usage:
                section += "\n"

        if self.result.usage:
            section += self._code_block(list(self.result.usage), language="")

        if not bin_commands and not self.result.usage:
            section += self._code_block([f"node {self.result.main}"])

        self._add_section(section)

    def _add_commands_section(self) -> None:
        if not self.result.commands:
            return

        section = "### Commands\n\n"
        section += "| Command | Description |\n"
        section += "|---------|-------------|\n"
        for command in self.result.commands:
            section += f"| `{command.name}` | {_cell(command.description)} |\n"

        self._add_section(section)

    def _add_options_section(self) -> None:
        if not self.result.flags:
            return

        section = "### Options\n\n"
        section += "| Option | Description |\n"
        section += "|--------|-------------|\n"
        for flag in self.result.flags:
            section += f"| `{flag.name}` | {_cell(flag.description)} |\n"

        self._add_section(section)

    def _add_examples_section(self) -> None:
        """Add one example invocation, using the first command if any."""
        bin_commands = self.result.bin_commands
        lines = []

        if bin_commands:
            main_bin = bin_commands[0]
            if self.result.commands:
                first = self.result.commands[0]
                lines.append(f"# {first.description or first.name}")
                lines.append(f"{main_bin} {first.name}")
            else:
                lines.append(main_bin)
        else:
            lines.append(f"node {self.result.main}")

        self._add_section("## Examples\n\n" + self._code_block(lines))

    def _add_development_section(self) -> None:
        scripts = [s for s in self.result.scripts if s not in EXCLUDED_SCRIPTS]
        if not scripts:
            return

        lines = [f"npm run {s}" for s in scripts[:MAX_DEVELOPMENT_SCRIPTS]]
        self._add_section("## Development\n\n" + self._code_block(lines))

    def _add_license_section(self) -> None:
        line = self.result.license
        if self.result.author:
            line += f" © {self.result.author}"
        if self.result.has_license_file:
            line += "\n\nSee [LICENSE](LICENSE) for details."

        self._add_section(f"## License\n\n{line}\n")


def render_readme(
    result: AnalysisResult,
    options: Optional[RenderOptions] = None,
) -> str:
    """
    Convenience function to render a README from an analysis.

    Args:
        result: The merged analysis
        options: Optional rendering options

    Returns:
        Rendered README as a Markdown string

    Example:
        from claw_readme.analyzer import analyze_project
        from claw_readme.renderer import render_readme

        result = analyze_project(Path("/path/to/project"))
        print(render_readme(result))
    """
    renderer = ReadmeRenderer(result, options)
    return renderer.render()


def render_json(result: AnalysisResult) -> str:
    """Serialize an analysis as indented JSON."""
    return json.dumps(result.to_dict(), indent=2, ensure_ascii=False)
