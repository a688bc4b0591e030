"""
Prompt templates for the conversational pipeline.

Defines the answer prompt (system instructions + retrieved context +
conversation history + user turn + tool scratchpad) and the
history-aware query rewrite prompt.

Dependencies: langchain_core.prompts
System role: Prompt templates for rewrite and generation stages
"""

from langchain_core.prompts import ChatPromptTemplate, MessagesPlaceholder

DEFAULT_SYSTEM_PROMPT = """You are a helpful assistant that answers the user's questions.

## Instructions
1. Use the provided context when it is relevant to the question
2. If the context doesn't contain enough information, say so clearly or use a tool
3. Use the conversation history to understand follow-up questions
4. Be concise but thorough in your explanations"""

NO_CONTEXT_PLACEHOLDER = "No relevant context was retrieved."

REWRITE_INSTRUCTION = (
    "Given the above conversation, generate a search query to look up in order "
    "to get information relevant to the conversation"
)

ANSWER_PROMPT = ChatPromptTemplate.from_messages([
    ("system", """{system_prompt}

## Context
{context}"""),
    MessagesPlaceholder("chat_history"),
    ("human", "{input}"),
    MessagesPlaceholder("agent_scratchpad", optional=True),
])

REWRITE_PROMPT = ChatPromptTemplate.from_messages([
    MessagesPlaceholder("chat_history"),
    ("user", "{input}"),
    ("user", REWRITE_INSTRUCTION),
])

JOKE_PROMPT = ChatPromptTemplate.from_messages([
    ("system", "You are a comedian AI. Tell me a joke on the following word"),
    ("human", "{input}"),
])

SYNONYMS_PROMPT = ChatPromptTemplate.from_template("Provide 5 synonyms for the word {input}.\n{format_instructions}")

EXTRACTION_PROMPT = ChatPromptTemplate.from_template(
    "Extract information from the following phrase.\n{format_instructions}\n{phrase}"
)
