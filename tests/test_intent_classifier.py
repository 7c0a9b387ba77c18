"""
Intent classification and retrieval policy tests
"""

import pytest

from app.services.intent_classifier import (
    Intent,
    classify,
    clean_statistics_query,
    is_product_query,
    is_ranking_query,
    is_tour_listing_query,
)


class TestClassify:
    @pytest.mark.parametrize("query", [
        "list your tours",
        "show me all tours",
        "which tours are available?",
        "Pokaż wszystkie wycieczki",
    ])
    def test_list_all(self, query):
        assert classify(query) == Intent.LIST_ALL

    @pytest.mark.parametrize("query", [
        "how many bookings for City Tour",
        "Reservation count for Krakow",
        "ile rezerwacji ma City Tour",
    ])
    def test_statistics(self, query):
        assert classify(query) == Intent.STATISTICS

    @pytest.mark.parametrize("query", [
        "what tours in Kraków",
        "tell me about Gdansk",
        "small group walks",
    ])
    def test_default_search(self, query):
        assert classify(query) == Intent.DEFAULT_SEARCH

    def test_empty_query_falls_back_to_default(self):
        assert classify("") == Intent.DEFAULT_SEARCH
        assert classify(None) == Intent.DEFAULT_SEARCH

    def test_list_trigger_wins_over_statistics(self):
        assert classify("list all bookings") == Intent.LIST_ALL


class TestPolicies:
    def test_tour_listing_query_in_both_languages(self):
        assert is_tour_listing_query("wycieczki w Gdańsku")
        assert is_tour_listing_query("What tours do you offer in Warsaw?")
        assert not is_tour_listing_query("history of the Wawel castle")

    def test_product_query(self):
        assert is_product_query("how much is the ticket")
        assert is_product_query("jakie macie oferty")
        assert not is_product_query("best pierogi in town")

    def test_ranking_query(self):
        assert is_ranking_query("which tour is the most popular")
        assert is_ranking_query("najpopularniejsze wycieczki")
        assert not is_ranking_query("how many bookings for City Tour")


class TestStatisticsCleaning:
    def test_strips_quantity_phrases(self):
        assert clean_statistics_query("how many bookings for City Tour") == "City Tour"

    def test_strips_punctuation_and_articles(self):
        assert clean_statistics_query("How many reservations were there for the Food Tour?") == "Food Tour"

    def test_polish_filler(self):
        assert clean_statistics_query("ile rezerwacji dla City Tour") == "City Tour"

    def test_only_filler(self):
        assert clean_statistics_query("how many bookings") == ""
