"""Parser for extracting problem data from Codeforces problem pages."""

from typing import Optional

from bs4 import BeautifulSoup, Tag
from loguru import logger

from contest_aggregator.domain.exceptions import MalformedUpstreamError
from contest_aggregator.domain.models import Problem, SampleTest

# Blocks that end the free-form statement part of a problem.
SECTION_CLASSES = ("input-specification", "output-specification", "sample-tests", "note")

# Tag box holding the rating ("*800") rather than a topic tag.
DIFFICULTY_TITLE = "Difficulty"


class ProblemPageParser:
    """Normalizes a problem page into a ``Problem``.

    The parser holds no state, so normalizing the same payload twice yields
    equal results. HTML fragments are serialized from the parsed tree and are
    not sanitized.
    """

    def normalize(self, contest_id: int, index: str, raw: str) -> Problem:
        """
        Parse problem page and extract data.

        Raises:
            MalformedUpstreamError: If title or statement cannot be extracted
        """
        soup = BeautifulSoup(raw, "lxml")

        statement_block = soup.find("div", class_="problem-statement")
        if not isinstance(statement_block, Tag):
            raise MalformedUpstreamError(f"Problem statement block not found for {contest_id}/{index}")

        header = statement_block.find("div", class_="header", recursive=False)

        title = self._extract_title(header)
        if not title:
            raise MalformedUpstreamError(f"Problem title not found for {contest_id}/{index}")

        statement = self._extract_statement(statement_block)
        if not statement:
            raise MalformedUpstreamError(f"Problem statement not found for {contest_id}/{index}")

        problem = Problem(
            contest_id=contest_id,
            index=index,
            title=title,
            statement=statement,
            input_spec=self._extract_section(statement_block, "input-specification"),
            output_spec=self._extract_section(statement_block, "output-specification"),
            examples=self._extract_section(statement_block, "sample-tests"),
            note=self._extract_section(statement_block, "note"),
            time_limit=self._extract_limit(header, "time-limit"),
            memory_limit=self._extract_limit(header, "memory-limit"),
            sample_tests=self._extract_sample_tests(statement_block),
            tags=self._extract_tags(soup),
            rating=self._extract_rating(soup),
        )

        logger.debug(f"Successfully parsed problem: {contest_id}/{index}")
        return problem

    @staticmethod
    def _extract_title(header: Optional[Tag]) -> Optional[str]:
        if header is None:
            return None
        title = header.find("div", class_="title")
        if title is None:
            return None
        return title.get_text(strip=True) or None

    @staticmethod
    def _extract_statement(statement_block: Tag) -> Optional[str]:
        """Outer HTML of the blocks between the header and the first section."""
        parts = []
        seen_header = False

        for child in statement_block.find_all(recursive=False):
            classes = child.get("class") or []
            if "header" in classes:
                seen_header = True
                continue
            if not seen_header:
                continue
            if any(section in classes for section in SECTION_CLASSES):
                break
            parts.append(str(child))

        return "".join(parts) or None

    @staticmethod
    def _extract_section(statement_block: Tag, section_class: str) -> Optional[str]:
        section = statement_block.find("div", class_=section_class)
        if section is None:
            return None
        return section.decode_contents().strip()

    @staticmethod
    def _extract_limit(header: Optional[Tag], limit_class: str) -> Optional[str]:
        """Value of a header limit, e.g. "2 seconds" without its label."""
        if header is None:
            return None
        limit = header.find("div", class_=limit_class)
        if limit is None:
            return None
        value = "".join(limit.find_all(string=True, recursive=False)).strip()
        return value or None

    @staticmethod
    def _extract_sample_tests(statement_block: Tag) -> tuple[SampleTest, ...]:
        inputs = statement_block.select("div.sample-test div.input pre")
        outputs = statement_block.select("div.sample-test div.output pre")
        return tuple(
            SampleTest(input=_pre_text(test_input), output=_pre_text(test_output))
            for test_input, test_output in zip(inputs, outputs)
        )

    @staticmethod
    def _extract_tags(soup: BeautifulSoup) -> tuple[str, ...]:
        return tuple(
            text
            for tag in soup.select("span.tag-box")
            if tag.get("title") != DIFFICULTY_TITLE and (text := tag.get_text(strip=True))
        )

    @staticmethod
    def _extract_rating(soup: BeautifulSoup) -> Optional[int]:
        """Difficulty from the ``*800`` tag box, if the problem is rated."""
        for tag in soup.select("span.tag-box"):
            if tag.get("title") != DIFFICULTY_TITLE:
                continue
            value = tag.get_text(strip=True).lstrip("*")
            if value.isascii() and value.isdigit():
                return int(value)
            logger.warning(f"Unexpected difficulty tag: {value!r}")
        return None


def _pre_text(pre: Tag) -> str:
    # Newer pages wrap each line in its own div, older ones use <br/>.
    lines = pre.get_text("\n").splitlines()
    return "\n".join(line.strip() for line in lines if line.strip())
