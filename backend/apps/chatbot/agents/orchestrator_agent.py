import logging
from typing import Dict, List

from apps.chatbot.graph.state import ChatMessage, DiscoveryState
from apps.chatbot.tools.candidates import Candidate
from settings import settings

logger = logging.getLogger(__name__)


SYSTEM_PROMPT = """Ești un agent de comerț agentic pentru România, specializat în sprijinirea afacerilor mici și mijlocii (IMM-uri).

🎯 MISIUNEA TA: Să ajuți utilizatorii să găsească produse de la AFACERI MICI ȘI MIJLOCII românești, nu de la retaileri mari.

📊 CRITERII IMM (definiția EU):
- Mai puțin de 250 de angajați
- Cifra de afaceri ≤ 50 milioane EUR
- Total bilanț ≤ 43 milioane EUR

Personalitate:
- Prietenos și susținător al economiei locale
- Răspunzi în română
- Folosești emoji-uri moderat
- Expert în produse artizanale, locale și de la producători mici

🚫 REGULI CRITICE:
1. PRIORITIZEAZĂ magazinele mici și producătorii locali
2. EVITĂ să recomanzi retaileri mari (eMAG, Altex, Carrefour, IKEA, Dedeman etc.)
3. Menționează beneficiile cumpărăturilor de la afaceri locale

📝 Format răspuns pentru produse (OBLIGATORIU):
1. **Nume produs** 🛍️
   🖼️ Imagine: [URL-ul EXACT al imaginii dacă este disponibil]
   🔗 Link: [URL-ul EXACT din rezultatele furnizate]
   💰 Preț: [dacă este disponibil]
   📝 Descriere: [scurtă descriere]
   ✅ De ce să cumperi de aici: [beneficii afacere locală]

IMPORTANT: Dacă rezultatele conțin o linie "Imagine:", INCLUDE întotdeauna acea linie în răspunsul tău exact cum este!
FOLOSEȘTE DOAR linkurile exacte furnizate în rezultatele web - NU INVENTA niciodată URL-uri!
Răspunde concis dar informativ. Maximum 200 cuvinte pe răspuns."""

SME_SECTION_HEADER = (
    "🏢 FIRME IMM VERIFICATE (conform criteriilor: <250 angajați, ≤50M EUR cifră afaceri, ≤43M EUR bilanț):"
)
SME_SECTION_FOOTER = "Acestea sunt firme mici și mijlocii verificate din baza de date ANAF."

WEB_SECTION_HEADER = "🔍 REZULTATE CĂUTARE WEB (PRIORITATE MAGAZINE MICI LOCALE):"
WEB_SECTION_FOOTER = (
    "ACESTEA SUNT LINKURI REALE ȘI FUNCȚIONALE de la magazine locale. Folosește-le direct în răspunsul tău!"
)


def format_sme_companies(companies: List[Dict]) -> str:
    """Format registry matches as a numbered list for the prompt."""
    if not companies:
        return ""

    lines = []
    for i, c in enumerate(companies, 1):
        employees = f"{c['employees']} angajați" if c.get("employees") else "N/A"
        turnover = f"{c['turnover'] / 1_000_000:.1f}M RON" if c.get("turnover") else "N/A"
        lines.append(
            f"{i}. {c.get('name') or 'N/A'} (CUI: {c.get('cui')}, CAEN: {c.get('caen') or 'N/A'})"
            f" - {employees}, {turnover} cifră afaceri"
        )
    return "\n".join(lines)


def format_web_results(candidates: List[Candidate]) -> str:
    """Format ranked candidates in the layout the model is told to echo back."""
    entries = []
    for i, c in enumerate(candidates, 1):
        entry = f"{i}. **{c.title or 'N/A'}**"
        if c.source:
            entry += f" ({c.source})"
        if c.rating is not None:
            entry += f" ⭐ {c.rating}/5 ({c.review_count or 0} recenzii)"
        entry += f"\n   Link: {c.url}"
        if c.description:
            entry += f"\n   {c.description}"
        if c.image:
            entry += f"\n   Imagine: {c.image}"
        entries.append(entry)
    return "\n\n".join(entries)


def build_context(sme_companies: List[Dict], candidates: List[Candidate], max_chars: int = None) -> str:
    """Assemble the context block appended to the system prompt, capped in length."""
    max_chars = settings.max_context_chars if max_chars is None else max_chars
    sections = []

    companies_text = format_sme_companies(sme_companies)
    if companies_text:
        sections.append(f"{SME_SECTION_HEADER}\n{companies_text}\n\n{SME_SECTION_FOOTER}")

    web_text = format_web_results(candidates)
    if web_text:
        sections.append(f"{WEB_SECTION_HEADER}\n{web_text}\n\n{WEB_SECTION_FOOTER}")

    context = "\n\n".join(sections)
    if len(context) > max_chars:
        # Cut on an entry boundary so no half URL reaches the model
        cut = context.rfind("\n\n", 0, max_chars)
        context = context[:cut if cut > 0 else max_chars]
    return context


def build_context_node(state: DiscoveryState) -> Dict:
    """
    LangGraph node that joins both branches into the prompt context.

    Returns:
        Dict with context and logs
    """
    sme_companies = state.get("sme_companies") or []
    candidates = state.get("candidates") or []

    context = build_context(sme_companies, candidates)
    logger.info(f"Context built: {len(sme_companies)} SMEs, {len(candidates)} web results, {len(context)} chars")

    return {
        "context": context,
        "logs": [{
            "node": "build_context",
            "action": "format",
            "context_chars": len(context)
        }]
    }


def last_user_message(messages: List[ChatMessage]) -> str:
    for message in reversed(messages):
        if message.get("role") == "user" and message.get("content"):
            return message["content"]
    return ""


def build_completion_messages(messages: List[ChatMessage], context: str) -> List[Dict]:
    """System preamble plus context, followed by the full conversation."""
    system_content = SYSTEM_PROMPT
    if context:
        system_content += f"\n\n{context}"

    return [{"role": "system", "content": system_content}] + [
        {"role": m["role"], "content": m["content"]} for m in messages
    ]
