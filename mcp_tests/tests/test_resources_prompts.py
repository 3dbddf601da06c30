from prompts.timeline_prompt import register_prompts
from resources.game_rules import register_resources


def test_placement_rules_resource(dummy_mcp):
    register_resources(dummy_mcp)

    text = dummy_mcp.resources["timeline://rules/placement"]()
    assert text.startswith("# Timeline placement rules")


def test_play_timeline_round_prompt(dummy_mcp):
    register_prompts(dummy_mcp)

    prompt = dummy_mcp.prompts["play_timeline_round"]
    any_category = prompt()
    science = prompt(card_count=3, category="Science")

    assert "Draw cards from any category." in any_category
    assert 'Draw cards from the category "Science" only.' in science
    assert "validate_placement" in science
