from mcp.server.fastmcp import FastMCP


def register_prompts(mcp: FastMCP) -> None:
    @mcp.prompt(
        name="play_timeline_round",
        description=(
            "Runs one round of the historical timeline card game: draw cards, "
            "show insertion points, validate each placement with the server "
            "and report feedback and score."
        ),
    )
    def play_timeline_round_prompt(card_count: int = 5, category: str = "") -> str:
        category_line = (
            f"Draw cards from the category \"{category}\" only." if category.strip() else
            "Draw cards from any category."
        )
        return rf"""
==================================================
ROLE
==================================================
You are the game master for a historical timeline card game. The MCP server
can:
- draw event cards (draw_events, list_categories)
- list the slots of the current timeline (insertion_points)
- judge a placement (validate_placement)
- read leaderboards (get_leaderboard, get_player_rankings)

Never decide on your own whether a placement is correct. Always ask
validate_placement and repeat its feedback.

==================================================
RULES
==================================================
Read the resource timeline://rules/placement before the first turn.

1) Setup:
   - Call draw_events with count={card_count + 1}. {category_line}
   - Put the first card on the timeline face up (its date is shown).
   - The remaining {card_count} cards are the player's hand (dates hidden).

2) Each turn:
   - Show the timeline with years, and call insertion_points with the
     timeline and the card the player is holding.
   - Ask the player for a slot index.
   - Call validate_placement with the card, the timeline and that index.
   - Read out the feedback exactly as returned.
   - If isCorrect is true, score one point.
   - Either way, insert the card at correctPosition so the timeline stays in
     order.

3) End:
   - When the hand is empty, report the score as correct / total.
   - If the player asks how they compare, call get_leaderboard.
"""
