from __future__ import annotations

from sqlalchemy import and_, select
from sqlalchemy.orm import Session

from mentorpath.db.models import CurriculumItem, Mentor

MENTORS: list[dict[str, object]] = [
    {
        "name": "Sarah Chen",
        "bio": "Senior Frontend Engineer with 8 years of experience in React, Vue, and modern web technologies. Passionate about building accessible and performant web applications.",
        "specializations": ["Web Development", "Full Stack Development"],
    },
    {
        "name": "Marcus Williams",
        "bio": "Full-stack developer specializing in Next.js and Node.js. Former tech lead at a YC startup. Loves mentoring aspiring developers.",
        "specializations": ["Web Development", "Full Stack Development", "Backend Engineering"],
    },
    {
        "name": "Priya Sharma",
        "bio": "iOS and React Native specialist with 6 years of mobile development experience. Built apps with millions of downloads.",
        "specializations": ["Mobile Development"],
    },
    {
        "name": "James Rodriguez",
        "bio": "Android developer and Flutter enthusiast. Google Developer Expert in mobile technologies.",
        "specializations": ["Mobile Development"],
    },
    {
        "name": "Elena Kowalski",
        "bio": "Backend architect with expertise in distributed systems, microservices, and cloud infrastructure. 10+ years in the industry.",
        "specializations": ["Backend Engineering", "DevOps & Cloud"],
    },
    {
        "name": "David Kim",
        "bio": "Systems engineer specializing in scalable APIs and database optimization. Previously at AWS and Stripe.",
        "specializations": ["Backend Engineering", "Full Stack Development"],
    },
    {
        "name": "Dr. Aisha Patel",
        "bio": "Machine Learning researcher with a PhD in Computer Science. Published author on NLP and computer vision topics.",
        "specializations": ["Data Science"],
    },
    {
        "name": "Michael Zhang",
        "bio": "Data Scientist at a Fortune 500 company. Expert in Python, TensorFlow, and building production ML pipelines.",
        "specializations": ["Data Science", "Computer Science Fundamentals"],
    },
    {
        "name": "Olivia Martinez",
        "bio": "Product Designer with 7 years of experience at top tech companies. Specializes in design systems and user research.",
        "specializations": ["UI/UX & Design"],
    },
    {
        "name": "Thomas Anderson",
        "bio": "UX Lead with a background in psychology. Expert in user testing, prototyping, and design thinking.",
        "specializations": ["UI/UX & Design", "Web Development"],
    },
    {
        "name": "Ryan Cooper",
        "bio": "Game developer with experience in Unity and Unreal Engine. Shipped 5 indie games on Steam.",
        "specializations": ["Game Development"],
    },
    {
        "name": "Lisa Huang",
        "bio": "DevOps engineer and AWS certified solutions architect. Expert in CI/CD, Kubernetes, and infrastructure as code.",
        "specializations": ["DevOps & Cloud", "Backend Engineering"],
    },
    {
        "name": "Alex Turner",
        "bio": "Security researcher and ethical hacker. OSCP certified with experience in penetration testing and security audits.",
        "specializations": ["Cybersecurity"],
    },
    {
        "name": "Dr. Robert Lee",
        "bio": "Computer Science professor with expertise in algorithms, data structures, and competitive programming.",
        "specializations": ["Computer Science Fundamentals", "Data Science"],
    },
    {
        "name": "Jennifer Walsh",
        "bio": "Serial entrepreneur and startup advisor. Founded 3 successful companies and mentored over 100 founders.",
        "specializations": ["Business & Startups"],
    },
    {
        "name": "Chris Thompson",
        "bio": "Product manager turned startup founder. Expert in MVP development, product-market fit, and fundraising.",
        "specializations": ["Business & Startups", "Full Stack Development"],
    },
    {
        "name": "Emily Foster",
        "bio": "Career coach and tech mentor with a broad background across multiple domains. Specializes in helping beginners find their path.",
        "specializations": ["General", "Web Development", "Mobile Development"],
    },
]

CURRICULUM_ITEMS: list[dict[str, object]] = [
    {
        "skill_domain": "Web Development",
        "title": "Setting Up Your Development Environment",
        "description": "Install VS Code, Node.js, and essential extensions for web development.",
        "item_type": "reading",
        "difficulty": "Beginner",
        "estimated_minutes": 30,
        "display_order": 1,
    },
    {
        "skill_domain": "Web Development",
        "title": "HTML & CSS Fundamentals",
        "description": "Learn the building blocks of web pages with HTML structure and CSS styling.",
        "item_type": "video",
        "difficulty": "Beginner",
        "estimated_minutes": 60,
        "display_order": 2,
    },
    {
        "skill_domain": "Web Development",
        "title": "JavaScript Basics",
        "description": "Master variables, functions, and control flow in JavaScript.",
        "item_type": "exercise",
        "difficulty": "Beginner",
        "estimated_minutes": 90,
        "display_order": 3,
    },
    {
        "skill_domain": "Web Development",
        "title": "Introduction to React",
        "description": "Learn component-based development with React and JSX.",
        "item_type": "video",
        "difficulty": "Beginner",
        "estimated_minutes": 60,
        "display_order": 4,
    },
    {
        "skill_domain": "Web Development",
        "title": "Building Your First React App",
        "description": "Create a complete React application with state management and routing.",
        "item_type": "project",
        "difficulty": "Beginner",
        "estimated_minutes": 180,
        "display_order": 5,
    },
    {
        "skill_domain": "Web Development",
        "title": "Tailwind CSS Mastery",
        "description": "Learn utility-first CSS with Tailwind for rapid UI development.",
        "item_type": "exercise",
        "difficulty": "Intermediate",
        "estimated_minutes": 90,
        "display_order": 6,
    },
    {
        "skill_domain": "Web Development",
        "title": "React Hooks Deep Dive",
        "description": "Master useState, useEffect, useContext, and custom hooks.",
        "item_type": "video",
        "difficulty": "Intermediate",
        "estimated_minutes": 120,
        "display_order": 7,
    },
    {
        "skill_domain": "Web Development",
        "title": "Building a Portfolio Website",
        "description": "Create a professional portfolio showcasing your web development skills.",
        "item_type": "project",
        "difficulty": "Intermediate",
        "estimated_minutes": 240,
        "display_order": 8,
    },
    {
        "skill_domain": "Full Stack Development",
        "title": "Full Stack Architecture Overview",
        "description": "Understand how frontend, backend, and databases work together.",
        "item_type": "reading",
        "difficulty": "Beginner",
        "estimated_minutes": 45,
        "display_order": 1,
    },
    {
        "skill_domain": "Full Stack Development",
        "title": "Node.js & Express Basics",
        "description": "Build your first API with Node.js and Express framework.",
        "item_type": "video",
        "difficulty": "Beginner",
        "estimated_minutes": 90,
        "display_order": 2,
    },
    {
        "skill_domain": "Full Stack Development",
        "title": "Database Design with PostgreSQL",
        "description": "Learn relational database design, SQL queries, and connections.",
        "item_type": "exercise",
        "difficulty": "Intermediate",
        "estimated_minutes": 120,
        "display_order": 3,
    },
    {
        "skill_domain": "Full Stack Development",
        "title": "Building REST APIs",
        "description": "Design and implement RESTful APIs with proper error handling.",
        "item_type": "project",
        "difficulty": "Intermediate",
        "estimated_minutes": 180,
        "display_order": 4,
    },
    {
        "skill_domain": "Full Stack Development",
        "title": "Next.js Full Stack Development",
        "description": "Build full-stack applications with Next.js App Router.",
        "item_type": "video",
        "difficulty": "Intermediate",
        "estimated_minutes": 150,
        "display_order": 5,
    },
    {
        "skill_domain": "Full Stack Development",
        "title": "Authentication & Authorization",
        "description": "Implement secure user authentication with JWT and sessions.",
        "item_type": "exercise",
        "difficulty": "Advanced",
        "estimated_minutes": 120,
        "display_order": 6,
    },
    {
        "skill_domain": "Mobile Development",
        "title": "Mobile Development Fundamentals",
        "description": "Understand mobile platforms, design patterns, and development approaches.",
        "item_type": "reading",
        "difficulty": "Beginner",
        "estimated_minutes": 30,
        "display_order": 1,
    },
    {
        "skill_domain": "Mobile Development",
        "title": "React Native Setup & Basics",
        "description": "Set up React Native environment and build your first mobile app.",
        "item_type": "video",
        "difficulty": "Beginner",
        "estimated_minutes": 90,
        "display_order": 2,
    },
    {
        "skill_domain": "Mobile Development",
        "title": "Mobile UI Components",
        "description": "Build responsive mobile interfaces with native components.",
        "item_type": "exercise",
        "difficulty": "Beginner",
        "estimated_minutes": 60,
        "display_order": 3,
    },
    {
        "skill_domain": "Mobile Development",
        "title": "Navigation in Mobile Apps",
        "description": "Implement stack, tab, and drawer navigation patterns.",
        "item_type": "video",
        "difficulty": "Intermediate",
        "estimated_minutes": 75,
        "display_order": 4,
    },
    {
        "skill_domain": "Mobile Development",
        "title": "Building a Mobile Todo App",
        "description": "Create a complete todo application with local storage.",
        "item_type": "project",
        "difficulty": "Intermediate",
        "estimated_minutes": 180,
        "display_order": 5,
    },
    {
        "skill_domain": "Backend Engineering",
        "title": "Backend Development Principles",
        "description": "Learn server-side architecture, API design, and best practices.",
        "item_type": "reading",
        "difficulty": "Beginner",
        "estimated_minutes": 45,
        "display_order": 1,
    },
    {
        "skill_domain": "Backend Engineering",
        "title": "Building APIs with Python & FastAPI",
        "description": "Create high-performance APIs using Python and FastAPI.",
        "item_type": "video",
        "difficulty": "Beginner",
        "estimated_minutes": 90,
        "display_order": 2,
    },
    {
        "skill_domain": "Backend Engineering",
        "title": "Database Optimization",
        "description": "Learn indexing, query optimization, and database performance.",
        "item_type": "exercise",
        "difficulty": "Intermediate",
        "estimated_minutes": 90,
        "display_order": 3,
    },
    {
        "skill_domain": "Backend Engineering",
        "title": "Microservices Architecture",
        "description": "Design and implement microservices-based applications.",
        "item_type": "video",
        "difficulty": "Advanced",
        "estimated_minutes": 120,
        "display_order": 4,
    },
    {
        "skill_domain": "Backend Engineering",
        "title": "Building a Scalable API",
        "description": "Create a production-ready API with caching and rate limiting.",
        "item_type": "project",
        "difficulty": "Advanced",
        "estimated_minutes": 240,
        "display_order": 5,
    },
    {
        "skill_domain": "Data Science",
        "title": "Introduction to Data Science",
        "description": "Understand the data science workflow and key concepts.",
        "item_type": "reading",
        "difficulty": "Beginner",
        "estimated_minutes": 30,
        "display_order": 1,
    },
    {
        "skill_domain": "Data Science",
        "title": "Python for Data Science",
        "description": "Learn pandas, numpy, and data manipulation techniques.",
        "item_type": "video",
        "difficulty": "Beginner",
        "estimated_minutes": 120,
        "display_order": 2,
    },
    {
        "skill_domain": "Data Science",
        "title": "Data Visualization with Python",
        "description": "Create insightful visualizations with matplotlib and seaborn.",
        "item_type": "exercise",
        "difficulty": "Beginner",
        "estimated_minutes": 90,
        "display_order": 3,
    },
    {
        "skill_domain": "Data Science",
        "title": "Machine Learning Fundamentals",
        "description": "Learn supervised and unsupervised learning algorithms.",
        "item_type": "video",
        "difficulty": "Intermediate",
        "estimated_minutes": 150,
        "display_order": 4,
    },
    {
        "skill_domain": "Data Science",
        "title": "Building a ML Classification Model",
        "description": "Create an end-to-end machine learning classification project.",
        "item_type": "project",
        "difficulty": "Intermediate",
        "estimated_minutes": 180,
        "display_order": 5,
    },
    {
        "skill_domain": "UI/UX & Design",
        "title": "Design Thinking Principles",
        "description": "Learn user-centered design methodology and research techniques.",
        "item_type": "reading",
        "difficulty": "Beginner",
        "estimated_minutes": 45,
        "display_order": 1,
    },
    {
        "skill_domain": "UI/UX & Design",
        "title": "Figma Fundamentals",
        "description": "Master the essential tools and workflows in Figma.",
        "item_type": "video",
        "difficulty": "Beginner",
        "estimated_minutes": 90,
        "display_order": 2,
    },
    {
        "skill_domain": "UI/UX & Design",
        "title": "Wireframing & Prototyping",
        "description": "Create low and high-fidelity wireframes and interactive prototypes.",
        "item_type": "exercise",
        "difficulty": "Beginner",
        "estimated_minutes": 60,
        "display_order": 3,
    },
    {
        "skill_domain": "UI/UX & Design",
        "title": "Design Systems",
        "description": "Build scalable design systems with components and tokens.",
        "item_type": "video",
        "difficulty": "Intermediate",
        "estimated_minutes": 120,
        "display_order": 4,
    },
    {
        "skill_domain": "UI/UX & Design",
        "title": "Designing a Mobile App",
        "description": "Create a complete mobile app design from research to prototype.",
        "item_type": "project",
        "difficulty": "Intermediate",
        "estimated_minutes": 240,
        "display_order": 5,
    },
    {
        "skill_domain": "DevOps & Cloud",
        "title": "DevOps Introduction",
        "description": "Understand CI/CD pipelines, automation, and DevOps culture.",
        "item_type": "reading",
        "difficulty": "Beginner",
        "estimated_minutes": 30,
        "display_order": 1,
    },
    {
        "skill_domain": "DevOps & Cloud",
        "title": "Docker Fundamentals",
        "description": "Learn containerization with Docker for consistent deployments.",
        "item_type": "video",
        "difficulty": "Beginner",
        "estimated_minutes": 90,
        "display_order": 2,
    },
    {
        "skill_domain": "DevOps & Cloud",
        "title": "GitHub Actions CI/CD",
        "description": "Set up automated testing and deployment pipelines.",
        "item_type": "exercise",
        "difficulty": "Intermediate",
        "estimated_minutes": 75,
        "display_order": 3,
    },
    {
        "skill_domain": "DevOps & Cloud",
        "title": "Kubernetes Basics",
        "description": "Deploy and manage containerized applications with Kubernetes.",
        "item_type": "video",
        "difficulty": "Advanced",
        "estimated_minutes": 150,
        "display_order": 4,
    },
    {
        "skill_domain": "Cybersecurity",
        "title": "Cybersecurity Fundamentals",
        "description": "Learn security principles, threats, and defense strategies.",
        "item_type": "reading",
        "difficulty": "Beginner",
        "estimated_minutes": 45,
        "display_order": 1,
    },
    {
        "skill_domain": "Cybersecurity",
        "title": "Web Application Security",
        "description": "Understand OWASP Top 10 and common web vulnerabilities.",
        "item_type": "video",
        "difficulty": "Beginner",
        "estimated_minutes": 90,
        "display_order": 2,
    },
    {
        "skill_domain": "Cybersecurity",
        "title": "Secure Coding Practices",
        "description": "Learn to write secure code and prevent common vulnerabilities.",
        "item_type": "exercise",
        "difficulty": "Intermediate",
        "estimated_minutes": 90,
        "display_order": 3,
    },
    {
        "skill_domain": "Cybersecurity",
        "title": "Penetration Testing Basics",
        "description": "Introduction to ethical hacking and penetration testing.",
        "item_type": "video",
        "difficulty": "Intermediate",
        "estimated_minutes": 120,
        "display_order": 4,
    },
    {
        "skill_domain": "Computer Science Fundamentals",
        "title": "Introduction to Algorithms",
        "description": "Learn algorithmic thinking and problem-solving strategies.",
        "item_type": "reading",
        "difficulty": "Beginner",
        "estimated_minutes": 45,
        "display_order": 1,
    },
    {
        "skill_domain": "Computer Science Fundamentals",
        "title": "Data Structures Essentials",
        "description": "Master arrays, linked lists, stacks, queues, and trees.",
        "item_type": "video",
        "difficulty": "Beginner",
        "estimated_minutes": 150,
        "display_order": 2,
    },
    {
        "skill_domain": "Computer Science Fundamentals",
        "title": "Algorithm Practice Problems",
        "description": "Solve classic algorithm problems with step-by-step solutions.",
        "item_type": "exercise",
        "difficulty": "Intermediate",
        "estimated_minutes": 120,
        "display_order": 3,
    },
    {
        "skill_domain": "Computer Science Fundamentals",
        "title": "Dynamic Programming",
        "description": "Learn optimization techniques and dynamic programming patterns.",
        "item_type": "video",
        "difficulty": "Advanced",
        "estimated_minutes": 180,
        "display_order": 4,
    },
    {
        "skill_domain": "Game Development",
        "title": "Game Development Overview",
        "description": "Understand game engines, design patterns, and development workflow.",
        "item_type": "reading",
        "difficulty": "Beginner",
        "estimated_minutes": 30,
        "display_order": 1,
    },
    {
        "skill_domain": "Game Development",
        "title": "Unity Fundamentals",
        "description": "Learn Unity basics, scene management, and game objects.",
        "item_type": "video",
        "difficulty": "Beginner",
        "estimated_minutes": 120,
        "display_order": 2,
    },
    {
        "skill_domain": "Game Development",
        "title": "2D Game Mechanics",
        "description": "Implement player movement, physics, and collision detection.",
        "item_type": "exercise",
        "difficulty": "Beginner",
        "estimated_minutes": 90,
        "display_order": 3,
    },
    {
        "skill_domain": "Game Development",
        "title": "Building a 2D Platformer",
        "description": "Create a complete 2D platformer game with levels and enemies.",
        "item_type": "project",
        "difficulty": "Intermediate",
        "estimated_minutes": 300,
        "display_order": 4,
    },
    {
        "skill_domain": "Business & Startups",
        "title": "Startup Fundamentals",
        "description": "Learn lean startup methodology and product development.",
        "item_type": "reading",
        "difficulty": "Beginner",
        "estimated_minutes": 45,
        "display_order": 1,
    },
    {
        "skill_domain": "Business & Startups",
        "title": "Building an MVP",
        "description": "Define, design, and build a minimum viable product.",
        "item_type": "video",
        "difficulty": "Beginner",
        "estimated_minutes": 90,
        "display_order": 2,
    },
    {
        "skill_domain": "Business & Startups",
        "title": "Product-Market Fit",
        "description": "Validate your idea and find product-market fit.",
        "item_type": "exercise",
        "difficulty": "Intermediate",
        "estimated_minutes": 60,
        "display_order": 3,
    },
    {
        "skill_domain": "Business & Startups",
        "title": "Fundraising & Pitching",
        "description": "Learn to pitch your startup and raise funding.",
        "item_type": "video",
        "difficulty": "Intermediate",
        "estimated_minutes": 90,
        "display_order": 4,
    },
    {
        "skill_domain": "General",
        "title": "Finding Your Path in Tech",
        "description": "Explore different tech career paths and find your direction.",
        "item_type": "reading",
        "difficulty": "Beginner",
        "estimated_minutes": 30,
        "display_order": 1,
    },
    {
        "skill_domain": "General",
        "title": "Programming Fundamentals",
        "description": "Core programming concepts applicable to any language.",
        "item_type": "video",
        "difficulty": "Beginner",
        "estimated_minutes": 90,
        "display_order": 2,
    },
    {
        "skill_domain": "General",
        "title": "Building Your First Project",
        "description": "Choose a beginner project and build it from scratch.",
        "item_type": "project",
        "difficulty": "Beginner",
        "estimated_minutes": 120,
        "display_order": 3,
    },
]


def seed_mentors(session: Session) -> int:
    inserted = 0
    for mentor in MENTORS:
        name = str(mentor["name"])
        existing = session.scalar(select(Mentor).where(and_(Mentor.name == name, Mentor.user_id.is_(None))))
        if existing:
            continue
        session.add(
            Mentor(
                name=name,
                bio=str(mentor["bio"]),
                specializations=list(mentor["specializations"]),
                is_active=True,
            )
        )
        inserted += 1

    session.commit()
    return inserted


def seed_curriculum(session: Session) -> int:
    inserted = 0
    for item in CURRICULUM_ITEMS:
        title = str(item["title"])
        domain = str(item["skill_domain"])
        existing = session.scalar(
            select(CurriculumItem).where(
                and_(CurriculumItem.title == title, CurriculumItem.skill_domain == domain)
            )
        )
        if existing:
            continue
        session.add(
            CurriculumItem(
                title=title,
                description=str(item["description"]),
                item_type=str(item["item_type"]),
                skill_domain=domain,
                difficulty=str(item["difficulty"]),
                estimated_minutes=int(item["estimated_minutes"]),
                display_order=int(item["display_order"]),
                is_active=True,
            )
        )
        inserted += 1

    session.commit()
    return inserted


def seed_catalog(session: Session) -> dict[str, int]:
    return {
        "seeded_mentors": seed_mentors(session),
        "seeded_curriculum_items": seed_curriculum(session),
    }
