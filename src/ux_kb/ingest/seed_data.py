"""Core UX research dataset loaded by ``ux-kb populate`` when no file is given."""

from ux_kb.models.entry import ApplicationContext, KnowledgeEntryCreate

CORE_UX_KNOWLEDGE: list[KnowledgeEntryCreate] = [
    KnowledgeEntryCreate(
        title="Fitts' Law for UI Design",
        content=(
            "Fitts' Law states that the time to acquire a target is a function of the distance "
            "to and size of the target. In UI design, this means that frequently used buttons "
            "should be large and placed close to where users expect them. Critical actions like "
            "'Submit' or 'Buy Now' should have larger click targets and be positioned "
            "prominently. This principle is essential for touch interfaces where finger size "
            "affects accuracy and overall usability."
        ),
        source="Paul Fitts Research & UX Design Principles",
        category="ux-patterns",
        primary_category="interaction",
        secondary_category="target-size",
        industry_tags=["technology"],
        complexity_level="beginner",
        use_cases=["call-to-action buttons", "touch interfaces"],
        related_patterns=["Mobile-First Design Principles"],
        tags=["interaction-design", "usability", "ui-patterns", "target-size"],
        metadata={"importance": "high", "applicability": "universal"},
    ),
    KnowledgeEntryCreate(
        title="E-commerce Cart Abandonment Solutions",
        content=(
            "Cart abandonment rates average 70% across industries. Key solutions include: "
            "transparent pricing with no hidden fees, guest checkout options, multiple payment "
            "methods, progress indicators, security badges, exit-intent popups, and abandoned "
            "cart email sequences. Implement save-for-later functionality and show social proof "
            "near checkout. Mobile optimization is crucial as mobile cart abandonment rates are "
            "typically higher."
        ),
        source="Baymard Institute & E-commerce Research",
        category="ecommerce-patterns",
        primary_category="conversion",
        secondary_category="checkout-flow",
        industry_tags=["ecommerce", "retail"],
        complexity_level="intermediate",
        use_cases=["checkout", "cart"],
        related_patterns=["Trust Signal Implementation"],
        tags=["cart-abandonment", "checkout-optimization", "conversion", "ecommerce"],
        metadata={"conversionImpact": "high", "avgAbandonmentRate": "70%"},
    ),
    KnowledgeEntryCreate(
        title="WCAG Color Contrast Standards",
        content=(
            "WCAG 2.1 requires minimum contrast ratios of 4.5:1 for normal text and 3:1 for "
            "large text (18pt+ or 14pt+ bold) to meet AA compliance. AAA level requires 7:1 for "
            "normal text and 4.5:1 for large text. Use tools like WebAIM's contrast checker to "
            "verify compliance. Consider users with color blindness and ensure information isn't "
            "conveyed through color alone."
        ),
        source="Web Content Accessibility Guidelines (WCAG) 2.1",
        category="accessibility",
        primary_category="accessibility",
        secondary_category="color-system",
        industry_tags=["technology", "government", "healthcare"],
        complexity_level="beginner",
        use_cases=["text contrast", "color palettes"],
        application_context=ApplicationContext(compliance=["WCAG 2.1 AA", "WCAG 2.1 AAA"]),
        tags=["accessibility", "color-contrast", "wcag", "compliance", "inclusive-design"],
        metadata={"affectedUsers": "15% of population"},
    ),
    KnowledgeEntryCreate(
        title="Mobile-First Design Principles",
        content=(
            "Mobile-first design starts with the smallest screen and progressively enhances for "
            "larger devices. Key principles: touch-friendly targets (44px minimum), "
            "thumb-friendly navigation zones, readable typography (16px+ body text), fast "
            "loading times, offline functionality consideration, and progressive disclosure of "
            "information. Design for one-handed use and consider device orientation changes."
        ),
        source="Luke Wroblewski & Mobile UX Research",
        category="ux-patterns",
        primary_category="layout",
        secondary_category="responsive-design",
        industry_tags=["technology"],
        complexity_level="intermediate",
        use_cases=["mobile layouts", "touch navigation"],
        related_patterns=["Fitts' Law for UI Design"],
        tags=["mobile-first", "responsive-design", "touch-interface", "progressive-enhancement"],
        metadata={"minTouchTarget": "44px", "minFontSize": "16px"},
    ),
    KnowledgeEntryCreate(
        title="Conversion Rate Optimization Benchmarks",
        content=(
            "Average conversion rates vary by industry: E-commerce (2-3%), SaaS (3-5%), Lead "
            "generation (2-5%), B2B services (2-3%). Key optimization areas: headlines (can "
            "improve conversion by 30%+), call-to-action buttons (test color, size, text), form "
            "length (reduce fields by 50% to increase conversions), social proof, "
            "urgency/scarcity, and mobile optimization. A/B testing is essential for "
            "optimization."
        ),
        source="ConversionXL & Industry Benchmarks",
        category="conversion",
        primary_category="conversion",
        secondary_category="optimization-strategy",
        industry_tags=["ecommerce", "saas", "marketing"],
        complexity_level="advanced",
        use_cases=["landing pages", "a/b testing"],
        tags=["conversion-optimization", "cro", "benchmarks", "ab-testing"],
        metadata={"headlineImpact": "30%+"},
    ),
    KnowledgeEntryCreate(
        title="Nielsen's 10 Usability Heuristics",
        content=(
            "Jakob Nielsen's 10 principles: 1) System status visibility, 2) Match system and "
            "real world, 3) User control and freedom, 4) Consistency and standards, 5) Error "
            "prevention, 6) Recognition rather than recall, 7) Flexibility and efficiency, "
            "8) Aesthetic and minimalist design, 9) Help users recognize/recover from errors, "
            "10) Help and documentation. These form the foundation of usability evaluation."
        ),
        source="Jakob Nielsen, Nielsen Norman Group",
        category="ux-research",
        primary_category="evaluation",
        secondary_category="heuristics",
        industry_tags=["technology"],
        complexity_level="beginner",
        use_cases=["heuristic evaluation", "design reviews"],
        tags=["usability-heuristics", "nielsen", "ux-evaluation", "design-principles"],
        metadata={"yearEstablished": "1994"},
    ),
    KnowledgeEntryCreate(
        title="Progressive Web App Best Practices",
        content=(
            "PWAs combine web and native app benefits. Key requirements: HTTPS, Service Worker, "
            "Web App Manifest, responsive design, fast loading (3s max), offline functionality, "
            "app-like navigation, push notifications, and installability. Focus on shell "
            "architecture, cache strategies, and performance optimization. PWAs can increase "
            "engagement by 137% and conversions by 52%."
        ),
        source="Google PWA Guidelines & Performance Data",
        category="ux-patterns",
        primary_category="performance",
        secondary_category="app-architecture",
        industry_tags=["technology"],
        complexity_level="advanced",
        use_cases=["offline support", "installable web apps"],
        related_patterns=[
            "Mobile-First Design Principles",
            "Performance Impact on User Experience",
        ],
        tags=["pwa", "progressive-web-app", "offline-first", "performance", "mobile-experience"],
        metadata={
            "loadTimeTarget": "3s",
            "engagementIncrease": "137%",
            "conversionIncrease": "52%",
        },
    ),
    KnowledgeEntryCreate(
        title="Typography Hierarchy Standards",
        content=(
            "Establish clear hierarchy with 6-8 font sizes maximum. Use modular scale "
            "(1.2-1.618 ratios) for consistent sizing. H1 should be 2-3x body text size, "
            "maintain adequate line spacing (1.4-1.6), and ensure sufficient contrast. Use no "
            "more than 2-3 font families per project. Optimal line length is 45-75 characters; "
            "use font weights to create emphasis without relying solely on size."
        ),
        source="Typography Research & Design Systems",
        category="visual",
        primary_category="visual",
        secondary_category="typography-system",
        industry_tags=["design", "technology"],
        complexity_level="intermediate",
        use_cases=["design systems", "content pages"],
        tags=["typography", "hierarchy", "readability", "design-system"],
        metadata={"modularScale": "1.2-1.618", "optimalLineLength": "45-75 characters"},
    ),
    KnowledgeEntryCreate(
        title="Form Design Optimization",
        content=(
            "Optimize forms for conversion: minimize required fields, use smart defaults, "
            "implement real-time validation, group related fields, use appropriate input types, "
            "provide clear error messages, and show progress for multi-step forms. "
            "Single-column layouts convert better than multi-column. Reduce cognitive load with "
            "conditional logic and auto-complete functionality."
        ),
        source="Form Optimization Research & UX Studies",
        category="conversion",
        primary_category="conversion",
        secondary_category="form-design",
        industry_tags=["technology", "saas", "fintech"],
        complexity_level="intermediate",
        use_cases=["signup forms", "checkout forms"],
        related_patterns=["Cognitive Load Reduction Strategies"],
        tags=["form-optimization", "conversion", "validation", "ux-patterns"],
        metadata={"layoutPreference": "single-column", "errorHandling": "inline"},
    ),
    KnowledgeEntryCreate(
        title="Trust Signal Implementation",
        content=(
            "Build user trust through: security badges (SSL certificates, payment security), "
            "social proof (testimonials, reviews, user counts), professional design, contact "
            "information visibility, clear return/refund policies, industry certifications, "
            "press mentions, and transparent pricing. Place trust signals near conversion points "
            "and checkout areas. Customer reviews can increase conversion by 270%."
        ),
        source="Trust & Conversion Research Studies",
        category="conversion",
        primary_category="conversion",
        secondary_category="trust-elements",
        industry_tags=["ecommerce", "fintech"],
        complexity_level="intermediate",
        use_cases=["checkout", "pricing pages"],
        application_context=ApplicationContext(security="payment security badges near checkout"),
        tags=["trust-signals", "social-proof", "conversion", "credibility"],
        metadata={"reviewsImpact": "270% conversion increase"},
    ),
    KnowledgeEntryCreate(
        title="Information Architecture Principles",
        content=(
            "Organize content using card sorting, tree testing, and user mental models. Follow "
            "principles: logical grouping, clear labeling, consistent navigation, breadcrumbs "
            "for deep sites, search functionality, and sitemap accessibility. Use the 7±2 rule "
            "for menu items and implement progressive disclosure. Consider user goals and create "
            "multiple paths to important content."
        ),
        source="Information Architecture Research & UX Methods",
        category="ux-patterns",
        primary_category="navigation",
        secondary_category="navigation-structure",
        industry_tags=["technology"],
        complexity_level="advanced",
        use_cases=["site navigation", "content organization"],
        application_context=ApplicationContext(scalability="3-4 navigation levels max"),
        tags=["information-architecture", "navigation", "content-organization"],
        metadata={"testingMethods": ["card-sorting", "tree-testing"]},
    ),
    KnowledgeEntryCreate(
        title="Microinteraction Design Guidelines",
        content=(
            "Microinteractions provide feedback and guide users through tasks. Include: visual "
            "feedback for actions, loading states, hover effects, form validation, and system "
            "status updates. Keep animations under 300ms for immediate responses, 500ms for "
            "transitions. Use easing functions for natural motion. Provide option to reduce "
            "motion for accessibility."
        ),
        source="Dan Saffer & Microinteraction Research",
        category="ux-patterns",
        primary_category="interaction",
        secondary_category="interaction-design",
        industry_tags=["technology", "saas"],
        complexity_level="advanced",
        use_cases=["loading states", "button feedback"],
        tags=["microinteractions", "feedback", "animation", "interaction-design"],
        metadata={"immediateResponse": "300ms", "transitionTiming": "500ms"},
    ),
    KnowledgeEntryCreate(
        title="Cognitive Load Reduction Strategies",
        content=(
            "Minimize cognitive load through: chunking information, using familiar patterns, "
            "providing clear navigation, reducing choices (Hick's Law), using white space "
            "effectively, and implementing progressive disclosure. Apply Miller's Rule (7±2 "
            "items) for menu design. Use visual hierarchy to guide attention and reduce decision "
            "fatigue through smart defaults and recommendations."
        ),
        source="Cognitive Psychology & UX Research",
        category="ux-research",
        primary_category="cognition",
        secondary_category="cognitive-principles",
        industry_tags=["technology", "healthcare"],
        complexity_level="intermediate",
        use_cases=["dashboards", "menus"],
        tags=["cognitive-load", "psychology", "decision-making", "usability"],
        metadata={"techniques": ["chunking", "progressive-disclosure", "defaults"]},
    ),
    KnowledgeEntryCreate(
        title="Accessibility Testing Methods",
        content=(
            "Comprehensive accessibility testing includes: automated tools (axe, WAVE), manual "
            "keyboard navigation, screen reader testing (NVDA, JAWS, VoiceOver), color contrast "
            "analysis, and user testing with disabled users. Test focus management, ARIA labels, "
            "semantic HTML, and alternative text. Aim for WCAG 2.1 AA compliance minimum."
        ),
        source="Web Accessibility Initiative & Testing Guidelines",
        category="accessibility",
        primary_category="accessibility",
        secondary_category="testing-methodology",
        industry_tags=["technology", "government"],
        complexity_level="advanced",
        use_cases=["qa", "audits"],
        application_context=ApplicationContext(compliance="WCAG 2.1 AA"),
        tags=["accessibility", "testing", "screen-readers", "wcag"],
    ),
    KnowledgeEntryCreate(
        title="User Research Methodology",
        content=(
            "Combine qualitative and quantitative research: user interviews, surveys, usability "
            "testing, A/B testing, analytics analysis, and field studies. Use appropriate sample "
            "sizes (5 users for usability testing, 100+ for quantitative data). Document findings "
            "with personas, journey maps, and insights. Research should inform design decisions "
            "and be conducted throughout the design process."
        ),
        source="UX Research Best Practices & Methodologies",
        category="ux-research",
        primary_category="evaluation",
        secondary_category="research-methods",
        industry_tags=["research"],
        complexity_level="intermediate",
        use_cases=["usability testing", "discovery research"],
        related_patterns=["Nielsen's 10 Usability Heuristics"],
        tags=["user-research", "methodology", "usability-testing", "data-collection", "insights"],
        metadata={
            "usabilityTestingSample": "5 users",
            "quantitativeSample": "100+",
            "methods": ["interviews", "surveys", "testing", "analytics"],
        },
    ),
    KnowledgeEntryCreate(
        title="Performance Impact on User Experience",
        content=(
            "Page load speed directly affects user experience and conversions. Target: 2-3 "
            "seconds load time, First Contentful Paint under 1.8s, Largest Contentful Paint "
            "under 2.5s, Cumulative Layout Shift under 0.1. Each second of delay reduces "
            "conversions by 7%. Optimize images, minimize JavaScript, use CDNs, and implement "
            "lazy loading. Core Web Vitals are now Google ranking factors."
        ),
        source="Google Performance Guidelines & Web Vitals",
        category="ux-patterns",
        primary_category="performance",
        secondary_category="performance-optimization",
        industry_tags=["technology", "ecommerce"],
        complexity_level="intermediate",
        use_cases=["landing pages", "checkout"],
        related_patterns=["Progressive Web App Best Practices"],
        tags=["performance", "web-vitals", "load-speed", "conversion-impact", "optimization"],
        metadata={
            "loadTimeTarget": "2-3s",
            "fcpTarget": "1.8s",
            "lcpTarget": "2.5s",
            "clsTarget": "0.1",
            "conversionImpact": "7% per second",
        },
    ),
    KnowledgeEntryCreate(
        title="Design System Principles",
        content=(
            "Build scalable design systems with: consistent color palette, typography scale, "
            "spacing system, component library, interaction patterns, and documentation. Use "
            "atomic design methodology (atoms, molecules, organisms). Maintain single source of "
            "truth, version control, and governance processes. Design systems can reduce design "
            "debt by 47% and development time by 34%."
        ),
        source="Design Systems Research & Best Practices",
        category="visual",
        primary_category="visual-design",
        secondary_category="design-system",
        industry_tags=["design", "technology"],
        complexity_level="advanced",
        use_cases=["component libraries", "multi-product consistency"],
        related_patterns=["Typography Hierarchy Standards"],
        tags=["design-system", "scalability", "consistency", "component-library", "atomic-design"],
        metadata={
            "methodology": "atomic-design",
            "designDebtReduction": "47%",
            "developmentTimeReduction": "34%",
            "components": ["atoms", "molecules", "organisms"],
        },
    ),
    KnowledgeEntryCreate(
        title="Error Prevention and Recovery",
        content=(
            "Implement error prevention through: input validation, confirmation dialogs for "
            "destructive actions, auto-save functionality, and clear constraints. For error "
            "recovery: provide specific error messages, suggest solutions, maintain user input, "
            "offer undo functionality, and show system status. Use progressive enhancement to "
            "handle edge cases gracefully."
        ),
        source="Error Handling UX Guidelines",
        category="ux-patterns",
        primary_category="interaction",
        secondary_category="error-handling",
        industry_tags=["technology"],
        complexity_level="beginner",
        use_cases=["forms", "destructive actions"],
        related_patterns=["Form Design Optimization", "Nielsen's 10 Usability Heuristics"],
        tags=["error-prevention", "error-recovery", "validation", "user-experience", "resilience"],
        metadata={
            "preventionMethods": ["validation", "confirmation", "auto-save"],
            "recoveryFeatures": ["specific-messages", "solutions", "undo"],
        },
    ),
    KnowledgeEntryCreate(
        title="SaaS Onboarding Best Practices",
        content=(
            "Effective SaaS onboarding includes: progressive user activation, clear value "
            "demonstration, interactive tutorials, empty state guidance, and achievement "
            "tracking. Use a combination of tooltips, guided tours, and contextual help. Focus "
            "on time-to-value and first meaningful action. Good onboarding can increase user "
            "retention by 50% and reduce churn by 30%."
        ),
        source="SaaS User Onboarding Research",
        category="saas-patterns",
        primary_category="onboarding",
        secondary_category="onboarding-flow",
        industry_tags=["saas"],
        complexity_level="intermediate",
        use_cases=["first-run experience", "empty states"],
        related_patterns=["Cognitive Load Reduction Strategies"],
        tags=["saas-onboarding", "user-activation", "retention", "guided-experience"],
        metadata={
            "retentionIncrease": "50%",
            "churnReduction": "30%",
            "keyMetrics": ["time-to-value", "first-meaningful-action", "activation-rate"],
        },
    ),
    KnowledgeEntryCreate(
        title="Fintech Security UX Patterns",
        content=(
            "Balance security with usability in fintech: multi-factor authentication with "
            "user-friendly options, biometric authentication, session management, clear security "
            "communications, fraud alerts, and transparent privacy policies. Use progressive "
            "security based on risk levels. Implement security without creating friction that "
            "drives users away. Security measures should feel protective, not punitive."
        ),
        source="Fintech UX Security Guidelines",
        category="fintech-patterns",
        primary_category="trust",
        secondary_category="security-ux",
        industry_tags=["fintech", "finance"],
        complexity_level="advanced",
        use_cases=["login", "payments"],
        related_patterns=["Trust Signal Implementation"],
        application_context=ApplicationContext(compliance=["PSD2 SCA", "PCI DSS"]),
        tags=["fintech-security", "authentication", "fraud-prevention", "user-trust"],
        metadata={
            "authMethods": ["MFA", "biometric", "risk-based"],
            "userPerception": "protective-not-punitive",
        },
    ),
]
