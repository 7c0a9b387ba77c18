# app/prompts/chat_prompt.py
"""
Tour assistant prompt templates
"""

from typing import Dict, List, Sequence

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage

from app.schemas.knowledge_schemas import KnowledgeFragment


class ChatPrompts:
    """Tour assistant prompts"""
    SYSTEM = """
You are an AI assistant for a tour company called "Walkative!".
Your goal is to help users find tours, answer questions about the company, and provide helpful information about the cities where the company operates.

CRITICAL INSTRUCTION ON KNOWLEDGE USAGE:
The knowledge provided to you is labeled by source:
1. [TOUR] and "Product:" entries are actual products sold by Walkative!. Use ONLY these when the user asks about available tours, booking, or prices.
2. [ARTICLE] entries are blog posts and guides. Do NOT present items mentioned there as Walkative! tours unless there is a matching [TOUR] entry.

When answering:
- If asked "what tours do you have?", list ONLY tour/product entries.
- For general advice (e.g. "what to see in Krakow") you can use [ARTICLE] information.
- If you are unsure whether a service exists, say you don't have that specific tour and offer alternatives from the tour list.
- If the question asks about dates or numbers not in the data, share what you do have and say so.
- Only refuse if there is no relevant information at all.

You can use the user's personal memory below to personalize communication."""

    CONTEXT = """{system}

### Knowledge Base (FACTUAL SOURCE):
{knowledge}

### User Memory (PERSONALIZATION ONLY):
{memory}
"""

    NO_KNOWLEDGE = "No relevant information found in the database."
    NO_MEMORY = "No previous user memory."


def build_system_prompt(fragments: Sequence[KnowledgeFragment], memory: Sequence[str]) -> str:
    knowledge = "\n\n".join(f.content for f in fragments if f.content)
    memory_text = "\n".join(f"- {item}" for item in memory if item)
    return ChatPrompts.CONTEXT.format(
        system=ChatPrompts.SYSTEM,
        knowledge=knowledge or ChatPrompts.NO_KNOWLEDGE,
        memory=memory_text or ChatPrompts.NO_MEMORY,
    )


def build_prompt(
    question: str,
    fragments: Sequence[KnowledgeFragment],
    memory: Sequence[str],
    history: Sequence[Dict[str, str]]
) -> List[BaseMessage]:
    """System context + history (+ the question unless history already ends with it)"""
    messages: List[BaseMessage] = [SystemMessage(content=build_system_prompt(fragments, memory))]

    for item in history:
        role = item.get("role")
        content = item.get("content", "")
        if role == "user":
            messages.append(HumanMessage(content=content))
        elif role == "assistant":
            messages.append(AIMessage(content=content))
        elif role == "system":
            messages.append(SystemMessage(content=content))

    last = history[-1] if history else None
    if not (last and last.get("role") == "user" and last.get("content") == question):
        messages.append(HumanMessage(content=question))

    return messages
