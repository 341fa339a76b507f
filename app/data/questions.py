"""
Default question bank.

Seeded into the database by ``scripts/seed_questions.py`` (or the admin
endpoint) and into the local store on first start. Technology and
Financial Services carry hand-written questions; every other industry gets
the same three generic ones keyed by its slug.
"""
import re
from typing import List

from app.schemas.onboarding import Industry
from app.schemas.question import QuestionCreate

GENERAL_QUESTIONS = [
    dict(
        question_key="gen-1",
        question="Have you appointed an Information Officer?",
        compliance_requirement="Information Officer Appointment",
        implementation_steps="Appoint an Information Officer and register with Information Regulator",
        documentation_required="Information Officer Registration Form",
        submission_details="Submit to Information Regulator",
        deadlines_renewals="Update upon change of Information Officer",
        law_requirement="POPIA Section 55",
    ),
    dict(
        question_key="gen-2",
        question="Have you conducted a personal information assessment?",
        compliance_requirement="Personal Information Impact Assessment",
        implementation_steps="Conduct a thorough assessment of personal information processing",
        documentation_required="Impact Assessment Report",
        submission_details="Keep records available for inspection",
        deadlines_renewals="Review annually",
        law_requirement="POPIA Section 4",
    ),
    dict(
        question_key="gen-3",
        question="Do you have a privacy policy?",
        compliance_requirement="Privacy Policy",
        implementation_steps="Develop a comprehensive privacy policy",
        documentation_required="Privacy Policy Document",
        submission_details="Make available to data subjects",
        deadlines_renewals="Update as needed",
        law_requirement="POPIA Section 18",
    ),
    dict(
        question_key="gen-4",
        question="Is your business registered with CIPC?",
        compliance_requirement="Business Registration",
        implementation_steps="Register business with CIPC",
        documentation_required="CIPC Registration Certificate",
        submission_details="Not applicable after registration",
        deadlines_renewals="Annual returns",
        law_requirement="Companies Act",
    ),
    dict(
        question_key="gen-5",
        question="Are you registered for tax with SARS?",
        compliance_requirement="Tax Registration",
        implementation_steps="Register for Income Tax, VAT, PAYE as applicable",
        documentation_required="Tax Registration Documents",
        submission_details="Submit returns according to SARS schedule",
        deadlines_renewals="Various tax deadlines",
        law_requirement="Income Tax Act, VAT Act",
    ),
]

INDUSTRY_QUESTIONS = {
    Industry.TECHNOLOGY: [
        dict(
            question_key="tech-1",
            question="Are you registering data processing activities?",
            compliance_requirement="Data Processing Records",
            implementation_steps="Document all data processing activities",
            documentation_required="Data Processing Register",
            submission_details="Keep records available for inspection",
            deadlines_renewals="Update continuously",
            law_requirement="POPIA Section 17",
        ),
        dict(
            question_key="tech-2",
            question="Have you implemented security measures to protect personal information?",
            compliance_requirement="Data Security",
            implementation_steps="Implement encryption, access controls, etc.",
            documentation_required="Security Policy",
            submission_details="Not required for submission",
            deadlines_renewals="Review annually",
            law_requirement="POPIA Section 19",
        ),
        dict(
            question_key="tech-3",
            question="Do you have a data breach notification procedure?",
            compliance_requirement="Data Breach Notification",
            implementation_steps="Create data breach response plan",
            documentation_required="Data Breach Policy",
            submission_details="Notify Information Regulator within 72 hours of breach",
            deadlines_renewals="Review annually",
            law_requirement="POPIA Section 22",
        ),
    ],
    Industry.FINANCIAL_SERVICES: [
        dict(
            question_key="fin-1",
            question="Have you registered with the Financial Sector Conduct Authority (FSCA)?",
            compliance_requirement="FSCA Registration",
            implementation_steps="Complete FSCA registration forms",
            documentation_required="FSCA Registration Certificate",
            submission_details="Submit to FSCA",
            deadlines_renewals="Renew annually",
            law_requirement="Financial Advisory and Intermediary Services Act (FAIS)",
        ),
        dict(
            question_key="fin-2",
            question="Do you have FICA compliance procedures in place?",
            compliance_requirement="FICA Compliance",
            implementation_steps="Implement KYC procedures",
            documentation_required="FICA Policy",
            submission_details="Keep records available for inspection",
            deadlines_renewals="Review annually",
            law_requirement="Financial Intelligence Centre Act (FICA)",
        ),
        dict(
            question_key="fin-3",
            question="Have you appointed a compliance officer?",
            compliance_requirement="Compliance Officer",
            implementation_steps="Appoint qualified compliance officer",
            documentation_required="Appointment Letter",
            submission_details="Notify FSCA",
            deadlines_renewals="Update upon change",
            law_requirement="FAIS Act Section 17",
        ),
    ],
}


def industry_slug(industry: str) -> str:
    """'Transport & Logistics' -> 'transport-&-logistics'"""
    return re.sub(r"\s+", "-", industry.lower())


def generic_industry_questions(industry: str) -> List[dict]:
    slug = industry_slug(industry)
    return [
        dict(
            question_key=f"{slug}-1",
            question=f"Does your {industry} business handle customer data?",
            compliance_requirement="Data Protection",
            implementation_steps="Implement data protection measures",
            documentation_required="Data Protection Policy",
            submission_details="Not required for submission",
            deadlines_renewals="Review annually",
            law_requirement="POPIA",
        ),
        dict(
            question_key=f"{slug}-2",
            question=f"Have you conducted industry-specific risk assessments for your {industry} business?",
            compliance_requirement="Risk Assessment",
            implementation_steps="Conduct comprehensive risk assessment",
            documentation_required="Risk Assessment Report",
            submission_details="Keep records available for inspection",
            deadlines_renewals="Update annually",
            law_requirement="Various",
        ),
        dict(
            question_key=f"{slug}-3",
            question=f"Do you have industry-specific permits or licenses for operating in the {industry} sector?",
            compliance_requirement="Industry Licensing",
            implementation_steps="Apply for relevant licenses",
            documentation_required="License Documentation",
            submission_details="Submit to regulatory bodies",
            deadlines_renewals="Varies by license type",
            law_requirement="Industry-specific regulations",
        ),
    ]


def default_questions() -> List[QuestionCreate]:
    """The full default bank: general questions plus three per industry."""
    questions = [QuestionCreate(industry=None, **q) for q in GENERAL_QUESTIONS]
    for industry in Industry:
        specific = INDUSTRY_QUESTIONS.get(industry) or generic_industry_questions(industry.value)
        questions.extend(QuestionCreate(industry=industry.value, **q) for q in specific)
    return questions
