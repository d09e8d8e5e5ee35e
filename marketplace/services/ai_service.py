# marketplace/services/ai_service.py
"""
Funkcje AI dla sklepu: opis produktu, wyszukiwanie, rekomendacje, podsumowanie recenzji.

Kazda funkcja: prompt z danych domenowych -> GeminiClient -> parsowanie odpowiedzi.
Kazdy blad (siec, brak klucza, zly JSON) konczy sie deterministycznym fallbackiem,
nigdy wyjatkiem do wywolujacego.
"""
import json
from typing import List, Optional, Sequence

from marketplace.domain.schemas import ReviewSummary
from marketplace.utils.logging import get_logger
from marketplace.utils.settings import GEMINI_FAST_MODEL, GEMINI_PRO_MODEL

logger = get_logger(__name__)

DEFAULT_DESCRIPTION = "A premium quality product that exceeds expectations."
FALLBACK_DESCRIPTION = "A high-quality product designed to meet your needs."
NO_REVIEWS_SUMMARY = "No reviews yet"
MAX_RECOMMENDATIONS = 4

_SUMMARY_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "summary": {"type": "STRING"},
        "pros": {"type": "ARRAY", "items": {"type": "STRING"}},
        "cons": {"type": "ARRAY", "items": {"type": "STRING"}},
    },
    "required": ["summary", "pros", "cons"],
}


def pick_by_indices(raw: str, candidates: Sequence, limit: Optional[int] = None) -> List:
    """
    Odpowiedz modelu to JSON-owa lista indeksow 1-based, w kolejnosci trafnosci.
    Indeksy spoza zakresu, nie-liczby i powtorzenia sa pomijane.
    """
    indices = json.loads(raw or "[]")
    if not isinstance(indices, list):
        raise ValueError("Expected a JSON array of indices")

    picked, seen = [], set()
    for index in indices:
        if isinstance(index, bool) or not isinstance(index, int):
            continue
        if not 1 <= index <= len(candidates) or index in seen:
            continue
        seen.add(index)
        picked.append(candidates[index - 1])
        if limit is not None and len(picked) >= limit:
            break
    return picked


def generate_description(client, product_name: str, category: Optional[str] = None) -> str:
    category_line = f"Category: {category}\n" if category else ""
    prompt = (
        "Generate a compelling, detailed product description for an e-commerce website.\n\n"
        f"Product Name: {product_name}\n"
        f"{category_line}\n"
        "Write a persuasive description that highlights features, benefits, and appeals "
        "to potential buyers. Include:\n"
        "1. A catchy opening statement\n"
        "2. Key features and specifications\n"
        "3. Benefits to the customer\n"
        "4. Use case scenarios\n"
        "5. Why customers should buy this product\n\n"
        "Keep it professional, engaging, and around 150-200 words."
    )

    try:
        text = client.generate(prompt, model=GEMINI_FAST_MODEL)
    except Exception as e:
        logger.error(f"Error generating product description: {e}")
        return FALLBACK_DESCRIPTION

    return text.strip() or DEFAULT_DESCRIPTION


def keyword_search(query: str, products: Sequence) -> List:
    needle = query.lower()
    return [
        p for p in products
        if needle in p.name.lower()
        or (p.short_description and needle in p.short_description.lower())
    ]


def intelligent_search(client, query: str, products: Sequence) -> List:
    if not products:
        return []

    product_list = "\n".join(
        f"{i}. {p.name} - {p.short_description or p.long_description or 'No description'}"
        for i, p in enumerate(products, start=1)
    )
    prompt = (
        "You are a smart e-commerce search assistant. Given this search query and product "
        "list, return the indices (1-based) of the most relevant products in order of relevance.\n\n"
        f'Search Query: "{query}"\n\n'
        f"Available Products:\n{product_list}\n\n"
        "Return only a JSON array of indices (numbers only) for relevant products, ordered by "
        "relevance. For example: [3, 1, 5]\n"
        "If no products match, return an empty array: []"
    )

    try:
        raw = client.generate(prompt, model=GEMINI_PRO_MODEL, json_response=True)
        return pick_by_indices(raw, products)
    except Exception as e:
        logger.error(f"Error in intelligent search, falling back to keyword match: {e}")
        return keyword_search(query, products)


def recommend_products(client, product_name: str, products: Sequence) -> List:
    if not products:
        return []

    product_list = "\n".join(
        f"{i}. {p.name} ({p.category.name if getattr(p, 'category', None) else 'Uncategorized'})"
        for i, p in enumerate(products, start=1)
    )
    prompt = (
        "You are a smart product recommendation engine. Given a product, recommend 3-4 "
        "complementary or similar products that customers might also like.\n\n"
        f"Current Product: {product_name}\n\n"
        f"Available Products:\n{product_list}\n\n"
        "Return only a JSON array of indices (1-based numbers) for recommended products. "
        "For example: [5, 2, 8, 3]"
    )

    try:
        raw = client.generate(prompt, model=GEMINI_FAST_MODEL, json_response=True)
        return pick_by_indices(raw, products, limit=MAX_RECOMMENDATIONS)
    except Exception as e:
        logger.error(f"Error recommending products: {e}")
        return list(products[:MAX_RECOMMENDATIONS])


def fallback_summary(reviews: Sequence) -> ReviewSummary:
    average = sum(r.rating for r in reviews) / len(reviews)
    return ReviewSummary(
        summary=f"Based on {len(reviews)} reviews, customers rated this product {average:.1f}/5 stars.",
        pros=["Customers have shared positive feedback"],
        cons=[],
    )


def summarize_reviews(client, reviews: Sequence) -> ReviewSummary:
    if not reviews:
        return ReviewSummary(summary=NO_REVIEWS_SUMMARY, pros=[], cons=[])

    review_texts = "\n".join(
        f"{i}. Rating: {r.rating}/5 - {r.comment or 'No comment'}"
        for i, r in enumerate(reviews, start=1)
    )
    prompt = (
        "Analyze these product reviews and provide a summary with pros and cons.\n\n"
        f"Reviews:\n{review_texts}\n\n"
        "Return a JSON object with:\n"
        "{\n"
        '  "summary": "A brief 2-3 sentence summary of overall customer sentiment",\n'
        '  "pros": ["List of positive points mentioned"],\n'
        '  "cons": ["List of negative points or concerns"]\n'
        "}"
    )

    try:
        raw = client.generate(
            prompt,
            model=GEMINI_PRO_MODEL,
            json_response=True,
            response_schema=_SUMMARY_SCHEMA,
        )
        return ReviewSummary.model_validate_json(raw)
    except Exception as e:
        logger.error(f"Error summarizing reviews: {e}")
        return fallback_summary(reviews)
