"""Tests for rule-based recommendations."""

from seo_text_analyzer.models import RecommendationType
from seo_text_analyzer.recommendations import generate_recommendations


class TestGenerateRecommendations:
    """Tests for generate_recommendations."""

    def test_all_rules_fire_in_order(self):
        """Test a weak, short, keyword-poor text gets all three recommendations."""
        recs = generate_recommendations(seo_score=50, word_count=40, keywords=[])

        assert [r.type for r in recs] == [
            RecommendationType.IMPROVEMENT,
            RecommendationType.CONTENT,
            RecommendationType.KEYWORDS,
        ]
        assert recs[0].title == "Improve overall SEO score"
        assert recs[1].description == (
            "Longer content tends to perform better in search results. Aim for at least 300 words."
        )
        assert recs[2].title == "Add more targeted keywords"

    def test_no_rules_fire(self, make_keyword):
        """Test a strong text gets no recommendations."""
        keywords = [make_keyword(f"kw{i}") for i in range(3)]

        assert generate_recommendations(seo_score=70, word_count=150, keywords=keywords) == []

    def test_boundaries(self, make_keyword):
        """Test each threshold is a strict lower bound."""
        keywords = [make_keyword("a"), make_keyword("b")]

        recs = generate_recommendations(seo_score=69, word_count=149, keywords=keywords)

        assert len(recs) == 3

    def test_only_keyword_rule(self, make_keyword):
        """Test rules are independent."""
        recs = generate_recommendations(seo_score=90, word_count=400, keywords=[make_keyword("a")])

        assert len(recs) == 1
        assert recs[0].type == RecommendationType.KEYWORDS

    def test_to_dict(self):
        """Test the serialized recommendation shape."""
        rec = generate_recommendations(seo_score=10, word_count=500, keywords=[])[0]

        assert rec.to_dict() == {
            "type": "improvement",
            "title": "Improve overall SEO score",
            "description": "Consider adding more relevant keywords and improving content structure",
        }
