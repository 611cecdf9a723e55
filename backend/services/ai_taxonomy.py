"""AI-domain overlay: secondary categories applied on top of a skill's primary one."""

from models.schemas.skill_taxonomy import DomainCategory
from services.skill_normalizer import normalize_skill

DEFAULT_DOMAIN = "other"

AI_SKILLS_TAXONOMY: dict[str, tuple[str, ...]] = {
    DomainCategory.CONCEPTS.value: (
        "Machine Learning", "Deep Learning", "Neural Networks",
        "Natural Language Processing", "Computer Vision", "Reinforcement Learning",
        "Generative AI", "Large Language Models", "LLMs", "Multimodal AI",
        "AI Personalization", "Reasoning", "RAG", "Retrieval Augmented Generation",
        "Synthetic Data", "Transfer Learning", "Fine-tuning", "Prompt Engineering",
        "Zero-shot Learning", "Few-shot Learning",
    ),
    DomainCategory.FRAMEWORKS.value: (
        "TensorFlow", "PyTorch", "Keras", "Scikit-learn", "Hugging Face",
        "Transformers", "LangChain", "LlamaIndex", "OpenAI API", "Anthropic API",
        "Diffusers", "JAX", "ONNX", "MLflow",
    ),
    DomainCategory.INFRASTRUCTURE.value: (
        "AI Infrastructure", "Model Hosting", "Model Serving", "Vector Databases",
        "Embeddings", "GPU Optimization", "Distributed Training",
        "Model Quantization", "AI Pipelines", "MLOps", "AI Observability",
        "Model Monitoring",
    ),
    DomainCategory.AGENTS.value: (
        "Autonomous Agents", "Multi-agent Coordination", "Multi-agent Systems",
        "Agentic Workflows", "Conversational AI", "Chatbots", "Agent Frameworks",
        "Tool Use", "Planning", "Reasoning Agents",
    ),
    DomainCategory.ENGINEERING.value: (
        "AI Engineering", "ML Engineering", "AI Model Improvement",
        "Model Evaluation", "AI Testing", "AI Security", "Responsible AI",
        "AI Ethics", "Explainable AI", "AI Alignment", "AI Safety",
    ),
    DomainCategory.DATA.value: (
        "Data Pipelines", "Data Preprocessing", "Feature Engineering",
        "Synthetic Data Training", "Data Augmentation", "Data Labeling",
        "Data Annotation", "Dataset Curation",
    ),
    DomainCategory.APPLICATIONS.value: (
        "Recommendation Systems", "Search Systems", "Content Generation",
        "Image Generation", "Text-to-Image", "Text-to-Speech", "Speech-to-Text",
        "Sentiment Analysis", "Entity Recognition", "Question Answering",
        "Summarization",
    ),
}

_NORMALIZED_TAXONOMY: dict[str, tuple[str, ...]] = {
    domain: tuple(normalize_skill(t) for t in terms)
    for domain, terms in AI_SKILLS_TAXONOMY.items()
}


def categorize_skill(skill: str) -> list[str]:
    """Domain tags whose term list contains ``skill`` or is contained by it.

    Returns ``["other"]`` when nothing matches.
    """
    normalized = normalize_skill(skill)
    if not normalized:
        return [DEFAULT_DOMAIN]
    categories = [
        domain
        for domain, terms in _NORMALIZED_TAXONOMY.items()
        if any(normalized in term or term in normalized for term in terms)
    ]
    return categories or [DEFAULT_DOMAIN]


def domain_terms(domain: str) -> tuple[str, ...]:
    """Normalized term list for a domain tag (empty for unknown tags)."""
    return _NORMALIZED_TAXONOMY.get(domain, ())


def related_terms(skill: str, limit: int = 5) -> list[str]:
    """Other terms sharing a domain with ``skill``, in table order."""
    categories = categorize_skill(skill)
    if DEFAULT_DOMAIN in categories:
        return []
    normalized = normalize_skill(skill)
    related: list[str] = []
    for domain in categories:
        for term in AI_SKILLS_TAXONOMY[domain]:
            if normalize_skill(term) != normalized and term not in related:
                related.append(term)
    return related[:limit]
