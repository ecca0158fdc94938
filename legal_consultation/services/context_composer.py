from typing import List, Optional

from ..models.schemas import (
    CaseType, ConsultationRequest, FirmContext, Language, LawyerPreferences, LegalReference
)

CASE_TYPE_GUIDANCE = {
    CaseType.COMMERCIAL: "Consider commercial registration requirements and business licensing",
    CaseType.CIVIL: "Review civil law principles and contract obligations",
    CaseType.CRIMINAL: "Ensure compliance with criminal law procedures and evidence requirements",
    CaseType.LABOR: "Check labor law compliance and employee rights",
    CaseType.FAMILY: "Consider Sharia law principles and family court procedures",
    CaseType.REAL_ESTATE: "Review property law and registration requirements",
    CaseType.INTELLECTUAL_PROPERTY: "Check IP registration and protection requirements",
    CaseType.ADMINISTRATIVE: "Review administrative procedures and government regulations",
    CaseType.CYBER_CRIME: "Consider cybercrime laws and digital evidence requirements",
    CaseType.INHERITANCE: "Review inheritance law and Sharia principles",
}
GENERIC_GUIDANCE = "Consider general legal principles and procedures"

PROMPT_DISCLAIMERS = [
    "This is general legal information, not specific legal advice",
    "Always consult with a qualified Saudi lawyer for specific cases",
    "Laws may have changed since last update",
    "Court interpretations may vary",
]

class ContextComposer:
    """Builds the layered system prompt for a consultation.

    Layers, in order: jurisdiction framing, cited references, case-type
    guidance, caller context, firm knowledge, lawyer preferences and the
    fixed disclaimers. Absent layers are skipped entirely.
    """

    def compose(
        self,
        request: ConsultationRequest,
        references: List[LegalReference],
        firm_context: Optional[FirmContext] = None,
        lawyer_prefs: Optional[LawyerPreferences] = None
    ) -> str:
        context = self._build_framing(request.language)
        context += self._build_references_section(references)
        context += self._build_case_type_section(request.case_type)

        if request.context:
            context += f"\nAdditional Context: {request.context}\n"

        if firm_context is not None:
            context += self._build_firm_section(firm_context)

        if lawyer_prefs is not None:
            context += self._build_lawyer_section(lawyer_prefs)

        context += self._build_disclaimer_section()
        return context

    def _build_framing(self, language: Language) -> str:
        language_instructions = {
            Language.AR: "Respond in Arabic.",
            Language.EN: "Respond in English.",
            Language.BOTH: "Respond in Arabic followed by an English translation.",
        }

        framing = (
            "You are a Saudi legal expert AI assistant. Provide accurate legal advice "
            "based on Saudi law and Sharia principles.\n\n"
        )
        framing += "IMPORTANT: Only provide advice based on Saudi legal system and Sharia law.\n"
        framing += f"{language_instructions.get(language, language_instructions[Language.AR])}\n"
        framing += "Current Saudi Legal Framework:\n"
        return framing

    def _build_references_section(self, references: List[LegalReference]) -> str:
        if not references:
            return ""

        section = "\nRelevant Legal References:\n"
        for ref in references:
            section += f"- {ref.law}, {ref.article}: {ref.title}\n"
        return section

    def _build_case_type_section(self, case_type: Optional[CaseType]) -> str:
        if case_type is None:
            return f"\nRelevant considerations:\n{GENERIC_GUIDANCE}\n"

        guidance = CASE_TYPE_GUIDANCE.get(case_type, GENERIC_GUIDANCE)
        section = f"\nCase Type: {case_type.value}\n"
        section += f"Relevant considerations for {case_type.value} cases:\n"
        section += f"{guidance}\n"
        return section

    def _build_firm_section(self, firm_context: FirmContext) -> str:
        section = "\nFirm-Specific Knowledge:\n"
        if firm_context.specializations:
            section += f"- Firm Specializations: {', '.join(firm_context.specializations)}\n"
        if firm_context.success_patterns:
            section += f"- Previous Success Patterns: {firm_context.success_patterns}\n"
        if firm_context.preferred_approaches:
            section += f"- Preferred Legal Approaches: {firm_context.preferred_approaches}\n"
        return section

    def _build_lawyer_section(self, prefs: LawyerPreferences) -> str:
        section = "\nLawyer Preferences:\n"
        if prefs.response_style:
            section += f"- Response Style: {prefs.response_style}\n"
        if prefs.detail_level:
            section += f"- Detail Level: {prefs.detail_level}\n"
        if prefs.specializations:
            section += f"- Lawyer Specializations: {', '.join(prefs.specializations)}\n"
        if prefs.risk_tolerance:
            section += f"- Risk Tolerance: {prefs.risk_tolerance}\n"
        if prefs.client_communication_style:
            section += f"- Client Communication Style: {prefs.client_communication_style}\n"
        if prefs.include_examples:
            section += "- Include Practical Examples: Yes\n"
        if prefs.include_citations:
            section += "- Include Legal Citations: Yes\n"
        return section

    def _build_disclaimer_section(self) -> str:
        section = "\nIMPORTANT DISCLAIMERS:\n"
        for disclaimer in PROMPT_DISCLAIMERS:
            section += f"- {disclaimer}\n"
        return section
