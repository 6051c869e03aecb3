"""Built-in agent definitions, pipeline presets and quick tasks."""

from typing import List

from .models import PipelinePreset, QuickTask, StepDefinition
from .prompts import (
    ANALYST_PROMPT,
    BUILDER_PROMPT,
    COORDINATOR_PROMPT,
    MERGER_PROMPT,
    REVIEWER_PROMPT,
    SCOUT_PROMPT,
)

AGENTS: List[StepDefinition] = [
    StepDefinition(
        id="coordinator",
        display_name="Coordinator",
        icon="🎯",
        color="#f59e0b",
        role="Routes tasks, creates execution plans, manages agent workflow",
        instruction_template=COORDINATOR_PROMPT,
    ),
    StepDefinition(
        id="scout",
        display_name="Scout",
        icon="🔍",
        color="#3b82f6",
        role="Researches patterns, best practices, and existing code",
        instruction_template=SCOUT_PROMPT,
    ),
    StepDefinition(
        id="builder",
        display_name="Builder",
        icon="🏗️",
        color="#10b981",
        role="Writes production-grade Next.js + Tailwind code",
        instruction_template=BUILDER_PROMPT,
    ),
    StepDefinition(
        id="reviewer",
        display_name="Reviewer",
        icon="🔬",
        color="#8b5cf6",
        role="Reviews code for quality, security, UX, and edge cases",
        instruction_template=REVIEWER_PROMPT,
    ),
    StepDefinition(
        id="analyst",
        display_name="Analyst",
        icon="📊",
        color="#ec4899",
        role="Breaks down requirements, defines data contracts, maps user flows",
        instruction_template=ANALYST_PROMPT,
    ),
    StepDefinition(
        id="merger",
        display_name="Merger",
        icon="🔗",
        color="#06b6d4",
        role="Combines agent outputs into final, cohesive deliverables",
        instruction_template=MERGER_PROMPT,
    ),
]

PIPELINE_PRESETS: List[PipelinePreset] = [
    PipelinePreset(
        key="full-feature",
        name="Full Feature Build",
        description="Scout -> Analyst -> Builder -> Reviewer -> Merger",
        steps=("scout", "analyst", "builder", "reviewer", "merger"),
    ),
    PipelinePreset(
        key="quick-build",
        name="Quick Build",
        description="Analyst -> Builder -> Reviewer",
        steps=("analyst", "builder", "reviewer"),
    ),
    PipelinePreset(
        key="research-first",
        name="Research First",
        description="Scout -> Analyst -> Coordinator",
        steps=("scout", "analyst", "coordinator"),
    ),
    PipelinePreset(
        key="code-review",
        name="Code Review",
        description="Reviewer -> Builder (fix) -> Merger",
        steps=("reviewer", "builder", "merger"),
    ),
    PipelinePreset(
        key="plan-only",
        name="Plan Only",
        description="Coordinator -> Scout -> Analyst",
        steps=("coordinator", "scout", "analyst"),
    ),
]

DEFAULT_PRESET = "full-feature"

QUICK_TASKS: List[QuickTask] = [
    QuickTask(
        label="/scan page",
        task=(
            "Build the /scan page: camera capture UI, file upload to Supabase Storage "
            "(cards bucket, user folder), call process-card Edge Function, then subscribe "
            "to pipeline_runs via Realtime to show live progress (OCR -> Transcribing -> "
            "Enriching -> Analyzing -> Drafting -> Ready). Show the extracted contact info "
            "when done with an 'Approve & Send' button that calls send-outreach."
        ),
    ),
    QuickTask(
        label="/dashboard",
        task=(
            "Build the /dashboard Command Center page: call dashboard-stats for KPIs "
            "(total contacts, credits remaining, open rate, response rate), show a pipeline "
            "funnel visualization, and a contacts table using contacts-list with search, "
            "filters (pipeline_stage, lead_temperature, is_favorite), sorting, and "
            "pagination. Each row links to /contacts/[id]."
        ),
    ),
    QuickTask(
        label="/contacts/[id]",
        task=(
            "Build the /contacts/[id] detail page: call contact-detail to load everything "
            "in one shot. Show contact info card with card image, intelligence profile "
            "(digital presence score gauge, pain signals, tech stack, PageSpeed), SMS draft "
            "with edit/regenerate buttons, email sequence timeline with edit/regenerate per "
            "email, and action buttons (send outreach, change pipeline stage, toggle "
            "favorite, export, delete via GDPR erasure)."
        ),
    ),
    QuickTask(
        label="Auth + Onboarding",
        task=(
            "Build the auth flow: /login (email+password, Google OAuth via Supabase), "
            "/signup, and /onboarding (multi-step form collecting: company name, job title, "
            "phone, Twilio phone number, sender email). Use update-profile to save. Set "
            "onboarding_completed=true when done. Add middleware to redirect "
            "unauthenticated users to /login and users with onboarding_completed=false to "
            "/onboarding."
        ),
    ),
    QuickTask(
        label="Layout + Navigation",
        task=(
            "Build the app shell: root layout with sidebar navigation (Dashboard, Scan, "
            "Contacts, Settings), user avatar/menu in top corner, credit usage indicator, "
            "mobile-responsive hamburger menu. Include a Supabase auth provider wrapper and "
            "toast notification system."
        ),
    ),
    QuickTask(
        label="/settings",
        task=(
            "Build the /settings page with tabs: Profile (edit name, company, title, phone, "
            "avatar), Billing (current plan, usage, upgrade button via create-checkout, "
            "manage via customer-portal), and Account (sender email, Twilio number, export "
            "all data, delete account)."
        ),
    ),
    QuickTask(
        label="/claim/[token]",
        task=(
            "Build the /claim/[token] page: GET claim-profile to validate token and show "
            "who connected with them. If not signed in, prompt to create account. If signed "
            "in, POST claim-profile to claim. Show success with the new connection details."
        ),
    ),
    QuickTask(
        label="Landing Page",
        task=(
            "Build the marketing landing page at /: hero section with phone mockup showing "
            "card scan, 3-step process (Scan -> AI Enriches -> Auto Follow-up), feature "
            "grid, pricing cards (Free/Starter $29/Pro $79/Agency $199), testimonial "
            "section, and CTA. Dark theme, bold typography, animated elements."
        ),
    ),
]


def find_quick_task(label: str) -> QuickTask:
    """Look up a quick task by label (case-insensitive).

    Raises:
        KeyError: If no quick task has that label.
    """
    wanted = label.strip().lower()
    for quick_task in QUICK_TASKS:
        if quick_task.label.lower() == wanted:
            return quick_task
    raise KeyError(label)
