"""Built-in interpreter training scenarios.

Stored in the same payload shape the content service delivers, then parsed
through Scenario.from_dict so they go through the same validation.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from drill_engine.models.constants import ECCI_CATEGORIES
from drill_engine.models.scenario import Scenario

ECCI_RUBRIC: Dict[str, Any] = {
    "categories": [
        {
            "id": "linguistic_accuracy",
            "label": "Linguistic Accuracy",
            "max": 20,
            "description": "Complete and accurate rendition of the message.",
        },
        {
            "id": "role_space_management",
            "label": "Role-Space Management",
            "max": 20,
            "description": "Managing alignment, presentation of self and interaction.",
        },
        {
            "id": "equipartial_fidelity",
            "label": "Equipartial Fidelity",
            "max": 20,
            "description": "Giving each party equal access to the interaction.",
        },
        {
            "id": "interaction_management",
            "label": "Interaction Management",
            "max": 20,
            "description": "Turn-taking, pacing and clarification requests.",
        },
        {
            "id": "cultural_competence",
            "label": "Cultural Competence",
            "max": 20,
            "description": "Recognising and bridging cultural frames.",
        },
    ],
    "total_max_score": 100,
}


def _impact(**deltas: float) -> Dict[str, float]:
    return {cat: float(deltas.get(cat, 0)) for cat in ECCI_CATEGORIES}


SCENARIO_PAYLOADS: List[Dict[str, Any]] = [
    {
        "id": "medical-consent",
        "slug": "medical-consent",
        "title": "Informed Consent in the ER",
        "subtitle": "A family member keeps answering for the patient",
        "category": "medical",
        "difficulty_base": "standard",
        "ecci_focus": ["role_space_management", "equipartial_fidelity"],
        "estimated_duration_minutes": 6,
        "scenario_data": {
            "setup": {
                "context": "An emergency physician needs consent for a lumbar puncture.",
                "setting": "Emergency department, curtained bay, late evening.",
                "characters": {
                    "doctor": {
                        "name": "Dr. Okafor",
                        "role": "Emergency physician",
                        "background": "Rushed, precise, expects short answers.",
                    },
                    "patient": {
                        "name": "Mrs. Alvarez",
                        "role": "Patient",
                        "age": 67,
                        "background": "Spanish-dominant, anxious, hard of hearing.",
                    },
                    "son": {
                        "name": "Daniel",
                        "role": "Patient's son",
                        "age": 34,
                        "background": "Bilingual, protective, tends to answer for his mother.",
                    },
                },
            },
            "decision_points": [
                {
                    "id": "dp1",
                    "scene": "The doctor asks whether the patient understands the risks. "
                    "Before you finish rendering the question, the son answers 'Yes, she's fine.'",
                    "options": [
                        {
                            "id": "A",
                            "text": "Finish rendering the question to the patient and interpret both "
                            "the son's remark and her answer.",
                            "is_optimal": True,
                            "consequences": {"patient_voice_preserved": True},
                            "score_impact": _impact(
                                linguistic_accuracy=6,
                                role_space_management=5,
                                equipartial_fidelity=6,
                                interaction_management=3,
                            ),
                            "next_point": "dp2",
                            "feedback": "Everyone hears everything that was said, and the patient "
                            "gets to answer for herself.",
                        },
                        {
                            "id": "B",
                            "text": "Render only the son's answer to the doctor.",
                            "is_optimal": False,
                            "consequences": {"patient_voice_preserved": False},
                            "score_impact": _impact(linguistic_accuracy=2, equipartial_fidelity=-3),
                            "next_point": "dp3",
                            "feedback": "The doctor now believes the patient consented when she "
                            "never spoke.",
                        },
                        {
                            "id": "C",
                            "text": "Tell the son in Spanish to let his mother speak.",
                            "is_optimal": False,
                            "consequences": {"interpreter_intervened": True},
                            "score_impact": _impact(role_space_management=-2, interaction_management=2),
                            "next_point": "dp2",
                            "feedback": "Well meant, but the doctor has no idea what was said.",
                        },
                    ],
                },
                {
                    "id": "dp2",
                    "scene": "The patient says she is frightened of 'the needle in the spine' "
                    "and asks you directly whether it will paralyse her.",
                    "options": [
                        {
                            "id": "A",
                            "text": "Render her question to the doctor in the first person.",
                            "is_optimal": True,
                            "consequences": {"question_redirected": True},
                            "score_impact": _impact(
                                linguistic_accuracy=5,
                                role_space_management=6,
                                equipartial_fidelity=4,
                                interaction_management=4,
                                cultural_competence=4,
                            ),
                            "next_point": "ending_optimal",
                            "feedback": "The doctor answers her fears directly.",
                        },
                        {
                            "id": "B",
                            "text": "Reassure her yourself that it is a routine procedure.",
                            "is_optimal": False,
                            "consequences": {"interpreter_gave_advice": True},
                            "score_impact": _impact(role_space_management=-4, cultural_competence=2),
                            "next_point": "ending_mixed",
                            "feedback": "You stepped into the clinician's role.",
                        },
                    ],
                },
                {
                    "id": "dp3",
                    "scene": "The doctor hands over the consent form and turns to leave.",
                    "options": [
                        {
                            "id": "A",
                            "text": "Ask the doctor to wait while you sight-translate the form "
                            "for the patient.",
                            "is_optimal": True,
                            "consequences": {"form_sight_translated": True},
                            "score_impact": _impact(
                                linguistic_accuracy=4,
                                equipartial_fidelity=4,
                                interaction_management=5,
                            ),
                            "next_point": "ending_good",
                            "feedback": "The patient finally hears the risks in her own language.",
                        },
                        {
                            "id": "B",
                            "text": "Let the son explain the form.",
                            "is_optimal": False,
                            "consequences": {"form_sight_translated": False},
                            "score_impact": _impact(equipartial_fidelity=-4, interaction_management=-2),
                            "next_point": "ending_poor",
                            "feedback": "Consent now rests on a summary you never heard.",
                        },
                    ],
                },
            ],
            "endings": {
                "optimal": {
                    "description": "The patient gives informed consent in her own words.",
                    "score_modifier": 10,
                },
                "good": {
                    "description": "Consent is obtained after a shaky start.",
                    "score_modifier": 5,
                },
                "mixed": {
                    "description": "Consent is obtained, but the patient still has unanswered fears.",
                    "score_modifier": 0,
                },
                "poor": {
                    "description": "The form is signed without the patient understanding it.",
                    "score_modifier": -5,
                },
                "failed": {
                    "description": "The procedure is delayed after a complaint.",
                    "score_modifier": -10,
                },
            },
        },
        "timer_settings": {"practice": 45, "standard": 30, "pressure": 20, "expert": 12},
        "scoring_rubric": ECCI_RUBRIC,
    },
    {
        "id": "courtroom-sidebar",
        "slug": "courtroom-sidebar",
        "title": "The Sidebar Whisper",
        "subtitle": None,
        "category": "legal",
        "difficulty_base": "pressure",
        "ecci_focus": ["equipartial_fidelity", "interaction_management"],
        "estimated_duration_minutes": 4,
        "scenario_data": {
            "setup": {
                "context": "Cross-examination of a witness through a consecutive interpreter.",
                "setting": "District courtroom, afternoon session.",
                "characters": {
                    "attorney": {
                        "name": "Ms. Brandt",
                        "role": "Defense attorney",
                        "background": "Fast, leading questions.",
                    },
                    "witness": {
                        "name": "Mr. Tran",
                        "role": "Witness",
                        "age": 52,
                        "background": "Vietnamese speaker, nervous, long answers.",
                    },
                },
            },
            "decision_points": [
                {
                    "id": "dp1",
                    "scene": "Mid-answer, the witness leans over and whispers to you: "
                    "'Should I say I didn't see it?'",
                    "options": [
                        {
                            "id": "A",
                            "text": "Interpret the whispered question aloud for the record.",
                            "is_optimal": True,
                            "consequences": {"whisper_on_record": True},
                            "score_impact": _impact(
                                linguistic_accuracy=8,
                                equipartial_fidelity=8,
                                role_space_management=6,
                            ),
                            "next_point": "dp2",
                            "feedback": "Everything said in court is rendered; the judge addresses it.",
                        },
                        {
                            "id": "B",
                            "text": "Say nothing and wait for him to continue.",
                            "is_optimal": False,
                            "consequences": {"whisper_on_record": False},
                            "score_impact": _impact(equipartial_fidelity=-5),
                            "next_point": "dp2",
                            "feedback": "An unrendered side conversation undermines the record.",
                        },
                    ],
                },
                {
                    "id": "dp2",
                    "scene": "The attorney objects that your rendition of 'maybe' was too strong.",
                    "options": [
                        {
                            "id": "A",
                            "text": "Ask the court's leave to clarify with the witness.",
                            "is_optimal": True,
                            "consequences": {"clarification_requested": True},
                            "score_impact": _impact(
                                interaction_management=10,
                                linguistic_accuracy=6,
                                cultural_competence=6,
                            ),
                            "next_point": "ending_good",
                            "feedback": "The record is corrected transparently.",
                        },
                        {
                            "id": "B",
                            "text": "Defend your rendition without consulting the witness.",
                            "is_optimal": False,
                            "consequences": {"clarification_requested": False},
                            "score_impact": _impact(interaction_management=-3),
                            "next_point": "ending_poor",
                            "feedback": "The dispute about meaning is left unresolved.",
                        },
                    ],
                },
            ],
            "endings": {
                "good": {"description": "The testimony stands on a clean record.", "score_modifier": 5},
                "poor": {
                    "description": "The testimony is challenged on appeal.",
                    "score_modifier": -5,
                },
            },
        },
        "timer_settings": {"practice": 30, "standard": 20, "pressure": 12, "expert": 8},
        "scoring_rubric": ECCI_RUBRIC,
    },
]


SCENARIO_LIBRARY: List[Scenario] = [Scenario.from_dict(p) for p in SCENARIO_PAYLOADS]


def get_scenario(slug: str) -> Optional[Scenario]:
    """Look up a built-in scenario by slug."""
    for s in SCENARIO_LIBRARY:
        if s.slug == slug:
            return s
    return None
