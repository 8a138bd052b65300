"""Create demo fronts for development/testing."""

from backend import storage

DEMO_FRONTS = [
    {
        "id": "front-demo-hollow-king",
        "name": "The Hollow King",
        "type": "campaign",
        "cast": ["Mayor Aldric Venn", "Sister Mara of the Ash"],
        "stakes": ["Will the town of Greyhollow survive the winter?"],
        "playerHooks": ["A relative of one hero went missing near the old mill."],
        "dangers": [
            {
                "id": "danger-demo-cult-of-ash",
                "name": "Cult of Ash",
                "dangerType": "Ambitious Organizations",
                "impulse": "to spread corruption",
                "impendingDoom": "Usurpation",
                "grimPortents": [
                    {"id": "portent-demo-1", "text": "Ash falls on the market square.", "completed": False},
                    {"id": "portent-demo-2", "text": "The town watch stops patrolling at night.", "completed": False},
                ],
                "secrets": [
                    {
                        "id": "secret-demo-1",
                        "xp": 30,
                        "text": "The cult leader is the mayor's brother.",
                        "revealed": False,
                        "revealedAt": None,
                    },
                ],
                "locations": ["The old mill", "Chapel of Embers"],
            },
        ],
    },
    {
        "id": "front-demo-drowned-road",
        "name": "The Drowned Road",
        "type": "adventure",
        "cast": [],
        "stakes": [],
        "playerHooks": [],
        "dangers": [],
    },
]


def create_demo_data() -> None:
    """Overwrite the stored fronts with the demo document."""
    storage.save_fronts(DEMO_FRONTS)
