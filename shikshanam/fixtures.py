"""Fixture-backed package, session and homepage data."""

from typing import Any

from .models import FAQ, Course, Package, Session, Testimonial

PACKAGES: list[Package] = [
    Package(
        sku="sanskrit-foundations",
        name="Sanskrit Foundations",
        short_description="Read, write and understand the language of the shastras",
        long_description=(
            "A guided path from the Devanagari alphabet to reading simple verses. "
            "Covers script, sandhi, core grammar and a working vocabulary."
        ),
        price_inr=4999,
        original_price_inr=7999,
        thumbnail_url="/assets/packages/sanskrit-foundations.jpg",
        included_courses=[
            Course(id="sanskrit_alphabet_001", title="Devanagari Alphabet", duration="3 weeks",
                   link="/courses/sanskrit_alphabet_001"),
            Course(id="sanskrit_grammar_001", title="Sanskrit Grammar I", duration="6 weeks",
                   link="/courses/sanskrit_grammar_001"),
            Course(id="sanskrit_vocab_001", title="Everyday Vocabulary", link="/courses/sanskrit_vocab_001"),
        ],
        live_pass_count=8,
        mentor_hours=4,
        certificate_included=True,
        prerequisites=[],
        faq=[
            FAQ(question="Do I need any prior knowledge?",
                answer="No. The package starts from the alphabet."),
            FAQ(question="How long do I have access?",
                answer="Access to recorded lessons is lifetime."),
        ],
        testimonials=[
            Testimonial(id="t-sf-1", name="Ananya R.", rating=5,
                        content="I can finally read the Gita in the original."),
        ],
    ),
    Package(
        sku="vedic-philosophy-complete",
        name="Vedic Philosophy Complete",
        short_description="Upanishads, Vedanta and Mimamsa in one structured journey",
        long_description=(
            "Study the principal Upanishads, the Vedanta traditions built on them "
            "and the Mimamsa method of reading the Vedas."
        ),
        price_inr=9999,
        original_price_inr=14999,
        thumbnail_url="/assets/packages/vedic-philosophy-complete.jpg",
        included_courses=[
            Course(id="upanishads_001", title="The Principal Upanishads", duration="8 weeks",
                   link="/courses/upanishads_001"),
            Course(id="vedanta_001", title="Vedanta Essentials", duration="6 weeks",
                   link="/courses/vedanta_001"),
            Course(id="mimamsa_001", title="Introduction to Mimamsa", link="/courses/mimamsa_001"),
        ],
        live_pass_count=12,
        mentor_hours=6,
        certificate_included=True,
        prerequisites=["Basic familiarity with Indian philosophy is helpful"],
        faq=[
            FAQ(question="Are the texts taught in Sanskrit?",
                answer="Texts are read in Sanskrit with English translation."),
        ],
        testimonials=[
            Testimonial(id="t-vp-1", name="Rahul M.", rating=5,
                        content="Clear, rigorous and rooted in the tradition."),
            Testimonial(id="t-vp-2", name="Sneha K.", rating=4,
                        content="The live sessions made the difference.",
                        avatar_url="/assets/avatars/sneha-k.jpg"),
        ],
    ),
    Package(
        sku="yoga-darshan-advanced",
        name="Yoga Darshan Advanced",
        short_description="Patanjali's Yoga Sutras with classical commentaries",
        long_description=(
            "A sutra-by-sutra study of the Yoga Sutras alongside the Vyasa bhashya, "
            "for students who already know the basics."
        ),
        price_inr=6999,
        thumbnail_url="/assets/packages/yoga-darshan-advanced.jpg",
        included_courses=[
            Course(id="yoga_sutras_001", title="Yoga Sutras of Patanjali", duration="10 weeks",
                   link="/courses/yoga_sutras_001"),
            Course(id="yoga_philosophy_001", title="Philosophy of Yoga", link="/courses/yoga_philosophy_001"),
        ],
        live_pass_count=6,
        mentor_hours=3,
        certificate_included=True,
        prerequisites=["Yoga Darshan", "Comfort reading transliterated Sanskrit"],
    ),
    Package(
        sku="emotional-intelligence-with-samkhya",
        name="Emotional Intelligence with Samkhya",
        short_description="Understand the mind through the Samkhya map of experience",
        long_description=(
            "Use the Samkhya analysis of the gunas and the inner instrument to "
            "build practical emotional awareness."
        ),
        price_inr=2999,
        original_price_inr=3999,
        thumbnail_url="/assets/packages/emotional-intelligence-with-samkhya.jpg",
        included_courses=[
            Course(id="samkhya_001", title="Samkhya Karika", link="/courses/samkhya_001"),
            Course(id="emotional_intelligence_001", title="Emotions and the Gunas",
                   link="/courses/emotional_intelligence_001"),
        ],
        live_pass_count=4,
        mentor_hours=2,
    ),
]

SESSIONS: dict[str, list[Session]] = {
    "sanskrit-foundations": [
        Session(id="sf-live-1", date="2025-02-01T14:30:00.000Z", seat_remaining=23, max_seats=50,
                title="Live Q&A: Sandhi"),
        Session(id="sf-live-2", date="2025-02-15T14:30:00.000Z", seat_remaining=41, max_seats=50,
                title="Live Reading: Bhagavad Gita 2.47"),
    ],
    "vedic-philosophy-complete": [
        Session(id="vp-live-1", date="2025-02-05T13:00:00.000Z", seat_remaining=12, max_seats=100,
                title="Isha Upanishad verse 1"),
    ],
    "yoga-darshan-advanced": [
        Session(id="yd-live-1", date="2025-02-08T04:00:00.000Z", seat_remaining=5, max_seats=30,
                title="Samadhi Pada discussion"),
    ],
}

HOMEPAGE_SECTIONS: dict[str, dict[str, Any]] = {
    "hero": {
        "title": "Unlock Ancient Indian Wisdom",
        "subtitle": "Master Sanskrit, Darshanas, and Self-help through our comprehensive learning platform",
        "description": "Join thousands of students in discovering the timeless knowledge of ancient India",
        "ctaText": "Start Learning",
        "ctaLink": "/courses",
        "stats": [
            {"label": "Active Students", "value": "2,500+"},
            {"label": "Certified Gurus", "value": "50+"},
            {"label": "Courses Available", "value": "100+"},
        ],
    },
    "schools": {
        "title": "Our Learning Schools",
        "subtitle": "Choose your path of wisdom",
        "schools": [
            {
                "id": "sanskrit",
                "name": "Sanskrit School",
                "description": "Master the ancient language of wisdom",
                "icon": "book",
                "link": "/schools/sanskrit",
            },
            {
                "id": "darshana",
                "name": "Darshan School",
                "description": "Explore Indian philosophical systems",
                "icon": "lightbulb",
                "link": "/schools/darshana",
            },
            {
                "id": "self-help",
                "name": "Self-help School",
                "description": "Transform your life with ancient wisdom",
                "icon": "heart",
                "link": "/schools/self-help",
            },
        ],
    },
    "gurus": {
        "title": "Meet Our Gurus",
        "subtitle": "Learn from authentic masters",
        "gurus": [
            {
                "id": "meera-patel",
                "name": "Meera Patel",
                "title": "Sanskrit Scholar",
                "description": "Expert in classical Sanskrit literature",
                "image": "/assets/avatars/meera-patel.jpg",
            },
            {
                "id": "priya-sharma",
                "name": "Priya Sharma",
                "title": "Vedanta Teacher",
                "description": "Specialist in Advaita Vedanta philosophy",
                "image": "/assets/avatars/priya-sharma.jpg",
            },
            {
                "id": "rajesh-kumar",
                "name": "Rajesh Kumar",
                "title": "Yoga Master",
                "description": "Traditional Hatha Yoga practitioner",
                "image": "/assets/avatars/rajesh-kumar.jpg",
            },
        ],
    },
}


def get_package(sku: str) -> Package | None:
    return next((pkg for pkg in PACKAGES if pkg.sku == sku), None)


def get_sessions(sku: str) -> list[Session]:
    return SESSIONS.get(sku, [])


def get_homepage_section(section_id: str | None) -> dict[str, Any] | None:
    if not section_id:
        return None
    return HOMEPAGE_SECTIONS.get(section_id)
