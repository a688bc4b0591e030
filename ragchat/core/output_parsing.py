"""
Prompt pipelines with output parsing.

Runs template -> generator -> parser for one-shot prompts outside the
conversational loop: plain strings, comma-separated lists and structured
extraction into pydantic models.

Dependencies: langchain_core.output_parsers, pydantic
System role: Structured single-call generation
"""

import logging
from typing import Any, Mapping

from langchain_core.exceptions import OutputParserException
from langchain_core.output_parsers import (
    BaseOutputParser,
    CommaSeparatedListOutputParser,
    PydanticOutputParser,
    StrOutputParser,
)
from langchain_core.prompts import ChatPromptTemplate
from pydantic import BaseModel, Field, create_model

from ragchat.core.exceptions import ConfigError, FatalError
from ragchat.core.interfaces import Generator
from ragchat.core.retry import RetryPolicy

logger = logging.getLogger(__name__)

FORMAT_INSTRUCTIONS_KEY = "format_instructions"


def string_parser() -> StrOutputParser:
    """Parser returning the model text unchanged."""
    return StrOutputParser()


def list_parser() -> CommaSeparatedListOutputParser:
    """Parser splitting the model text on commas."""
    return CommaSeparatedListOutputParser()


def schema_parser(schema: type[BaseModel]) -> PydanticOutputParser:
    """Parser validating JSON output against a pydantic model."""
    return PydanticOutputParser(pydantic_object=schema)


def descriptions_parser(
    descriptions: Mapping[str, str],
    model_name: str = "ExtractedFields",
) -> PydanticOutputParser:
    """
    Parser for string fields declared by name and description.

    Args:
        descriptions: Mapping of field name to field description
        model_name: Name of the generated pydantic model

    Returns:
        PydanticOutputParser: Parser over a dynamically created model

    Raises:
        ConfigError: When no fields are given
    """
    if not descriptions:
        raise ConfigError("descriptions must declare at least one field", field="descriptions")
    fields = {
        name: (str, Field(description=description))
        for name, description in descriptions.items()
    }
    return PydanticOutputParser(pydantic_object=create_model(model_name, **fields))


class PromptPipeline:
    """Render a template, call the generator and parse its answer."""

    def __init__(
        self,
        template: ChatPromptTemplate,
        generator: Generator,
        parser: BaseOutputParser | None = None,
        retry_policy: RetryPolicy | None = None,
    ) -> None:
        self._template = template
        self._generator = generator
        self._parser = parser or StrOutputParser()
        self._retry = retry_policy or RetryPolicy()

    def run(self, **variables: Any) -> Any:
        """
        Execute the pipeline.

        format_instructions is filled from the parser when the template
        declares it and the caller did not pass it.

        Args:
            **variables: Template variables

        Returns:
            Parsed output (str, list[str] or pydantic model)

        Raises:
            ConfigError: When a template variable is missing
            FatalError: When the generator requests tools or the output cannot be parsed
            TransientError: When retries are exhausted
        """
        if FORMAT_INSTRUCTIONS_KEY in self._template.input_variables and FORMAT_INSTRUCTIONS_KEY not in variables:
            variables[FORMAT_INSTRUCTIONS_KEY] = self._format_instructions()

        try:
            messages = self._template.invoke(variables).to_messages()
        except KeyError as e:
            raise ConfigError(f"Missing template variable: {e}", field="variables") from e

        response = self._retry.call("run", self._generator.invoke, messages)
        if not response.is_final:
            raise FatalError(
                "Prompt pipeline received tool calls instead of text",
                collaborator="generator",
            )

        try:
            parsed = self._parser.parse(response.content)
        except OutputParserException as e:
            logger.warning(f"{__name__}:run - Failed to parse output: {e}")
            raise FatalError(
                "Generator output could not be parsed",
                collaborator="generator",
                details={"parser": type(self._parser).__name__},
            ) from e

        logger.info(f"{__name__}:run - Parsed output with {type(self._parser).__name__}")
        return parsed

    def _format_instructions(self) -> str:
        try:
            return self._parser.get_format_instructions()
        except NotImplementedError:
            return ""
