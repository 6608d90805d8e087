CONTENT_TEMPLATES = [
    {
        "id": "business-proposal",
        "name": "Business Proposal",
        "description": "Template for commercial proposals",
        "content": """# Business Proposal
## Executive Summary
General description of the proposal and its main objectives.

## Problem
- Identification of the problem or need
- Market impact
- Opportunity for improvement

## Proposed Solution
Detailed description of the solution we offer.

## Benefits
- Main benefit 1
- Main benefit 2
- Main benefit 3

## Implementation
Implementation plan and schedule.

## Investment
Required investment and expected return.""",
    },
    {
        "id": "company-overview",
        "name": "Company Overview",
        "description": "Template for institutional presentations",
        "content": """# Our Company
## Who We Are
Mission, vision and values of the organization.

## History
Brief history and key milestones.

## Services
- Main service 1
- Main service 2
- Main service 3

## Team
Leadership team and key collaborators.

## Achievements
Main achievements and awards.

## Contact
Contact information and next steps.""",
    },
]
