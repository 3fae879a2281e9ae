# src/chat/prompts.py — v1
"""Prompt templates and conversation assembly for the banking assistant.

The document context goes into the system entry, ahead of anything that
varies per request, so consecutive requests share the longest possible
byte-identical prompt prefix.
"""

from __future__ import annotations

from bankchat.cache.normalize import normalize_context_text
from bankchat.core.models import AnalysisKind, DocumentFormat
from bankchat.llm.models import Message

SYSTEM_INSTRUCTION = """\
You are a specialized banking analytics expert assistant for BankersGPS.
You provide detailed, accurate analysis of banking data with focus on practical insights and actionable recommendations.

Always structure your responses with clear headings and bullet points for readability.
Focus on business implications and risk management insights."""

DOCUMENTATION_INSTRUCTION = """\
Use the documentation context below to answer user questions.

When answering:
- If the question relates to topics covered in the documentation (banking, interest rates, risk management, BankersGPS features, assumptions, etc.), provide a helpful and thorough answer based on the documentation.
- If the question is completely unrelated to banking, finance, or BankersGPS, respond with exactly this message:

No result found. Try restating your question in more detail, or contact a Plansmith expert for additional help.

**Email:** support@bankersgps.com
**Call:** 800-323-3281"""

ANALYSIS_CONTEXTS: dict[AnalysisKind, str] = {
    AnalysisKind.RATE_RISK: """\
BANKING CONTEXT - RATE RISK MANAGEMENT STRATEGY:
You are analyzing Rate Risk Management data for a bank. This involves:

- Asset-Liability Management (ALM): Managing the mismatch between asset and liability repricing
- Gap Analysis: Measuring repricing mismatches across different time periods
- Risk Management Bubbles: A visual method showing asset/liability terms, yields/costs, and yield curve relationships
- Key Components:
  * Asset Benefit: Distance from asset bubble to yield curve
  * Deposit Benefit: Distance from liability bubble to yield curve
  * Basis Risk Component: Vertical distance between asset/liability bubbles on yield curve
  * Risk/Reward Trade-off: Basis Risk Component (bp) / Duration Mismatch (months)

Focus on interest rate risk, duration mismatches, repricing gaps, and asset-liability management strategies.""",
    AnalysisKind.NET_INTEREST: """\
BANKING CONTEXT - NET INTEREST MARGIN SIMULATIONS:
You are analyzing Net Interest Margin (NIM) simulation data for a bank. This involves:

- Rate Shock Analysis: Stress testing NIM under various interest rate scenarios
- Gap Analysis Foundation: Using asset-liability gaps as basis for detailed simulations
- Rate Scenarios: Typically +/- 100bp, 200bp, 300bp from current rates
- Key Metrics:
  * Net Interest Margin (NIM): Net interest income as % of earning assets
  * Interest Income/Expense: How rates affect bank's income statement
  * Rate Sensitivity: How quickly assets/liabilities reprice with rate changes
  * Simulation Variables: Repayment speeds, repricing speeds, maturity replacements

Focus on income impact, margin compression/expansion, rate sensitivity, and earnings at risk analysis.""",
}

CONTEXT_BEGIN = "=== DOCUMENTATION CONTEXT ==="
CONTEXT_END = "=== END DOCUMENTATION CONTEXT ==="


def build_system_prompt(
    analysis_kind: AnalysisKind | None = None,
    context_text: str = "",
) -> str:
    """System entry: instruction, optional analysis context, documentation block."""
    sections = [SYSTEM_INSTRUCTION]
    if analysis_kind is not None:
        sections.append(ANALYSIS_CONTEXTS[analysis_kind])
    if context_text.strip():
        sections.append(DOCUMENTATION_INSTRUCTION)
        sections.append(f"{CONTEXT_BEGIN}\n{context_text}\n\n{CONTEXT_END}")
    return "\n\n".join(sections)


def build_user_prompt(
    question: str,
    uploaded_text: str = "",
    uploaded_format: DocumentFormat | None = None,
) -> str:
    """User entry: the question, then the uploaded document's text if any."""
    content = question.strip()
    if uploaded_text.strip():
        label = (uploaded_format or DocumentFormat.PDF).label
        content += f"\n\nUse this data from {label}:\n{normalize_context_text(uploaded_text)}"
    return content


def build_conversation(
    question: str,
    analysis_kind: AnalysisKind | None = None,
    context_text: str = "",
    uploaded_text: str = "",
    uploaded_format: DocumentFormat | None = None,
    history: list[Message] | None = None,
) -> list[Message]:
    """Assemble the ordered, role-tagged conversation sent to the provider.

    Order: system entry, prior turns (system turns from the caller are
    dropped), then the user entry carrying the question.
    """
    messages = [
        Message(role="system", content=build_system_prompt(analysis_kind, context_text))
    ]
    for turn in history or []:
        if turn.role != "system" and turn.content.strip():
            messages.append(turn)
    messages.append(
        Message(
            role="user",
            content=build_user_prompt(question, uploaded_text, uploaded_format),
        )
    )
    return messages
