# demo_data.py — 백엔드 대신 쓰는 고정 데모 데이터
# 세션마다 services/workspace.py 가 deepcopy 해서 사용하므로 여기 값은 수정하지 않는다.

ADMIN_ID = "00000000-0000-0000-0000-000000000001"
TUTOR1_ID = "00000000-0000-0000-0000-000000000002"
TUTOR2_ID = "00000000-0000-0000-0000-000000000003"
STUDENT1_ID = "00000000-0000-0000-0000-000000000004"
STUDENT2_ID = "00000000-0000-0000-0000-000000000005"
STUDENT3_ID = "00000000-0000-0000-0000-000000000006"

SEED_TS = "2024-01-01T00:00:00Z"

# 로그인 가능한 고정 사용자 (세션 검증 기준)
DEMO_USERS = [
    {"id": ADMIN_ID, "email": "admin@lms.com", "full_name": "System Administrator", "role": "admin",
     "created_at": SEED_TS, "updated_at": SEED_TS},
    {"id": TUTOR1_ID, "email": "tutor1@lms.com", "full_name": "Dr. John Smith", "role": "tutor",
     "created_at": SEED_TS, "updated_at": SEED_TS},
    {"id": TUTOR2_ID, "email": "tutor2@lms.com", "full_name": "Prof. Sarah Johnson", "role": "tutor",
     "created_at": SEED_TS, "updated_at": SEED_TS},
    {"id": STUDENT1_ID, "email": "student1@lms.com", "full_name": "Alice Brown", "role": "student",
     "created_at": SEED_TS, "updated_at": SEED_TS},
    {"id": STUDENT2_ID, "email": "student2@lms.com", "full_name": "Bob Wilson", "role": "student",
     "created_at": SEED_TS, "updated_at": SEED_TS},
    {"id": STUDENT3_ID, "email": "student3@lms.com", "full_name": "Carol Davis", "role": "student",
     "created_at": SEED_TS, "updated_at": SEED_TS},
]

# 로그인 화면의 자동 입력 버튼
DEMO_LOGIN_SHORTCUTS = [
    ("Admin Account", "admin@lms.com"),
    ("Tutor Account", "tutor1@lms.com"),
    ("Student Account", "student1@lms.com"),
]

DEMO_COURSES = [
    {
        "id": "course-1",
        "title": "Introduction to Computer Science",
        "description": "Learn the fundamentals of computer science including programming, algorithms, and data structures.",
        "tutor_id": TUTOR1_ID,
        "created_at": SEED_TS,
        "updated_at": SEED_TS,
    },
    {
        "id": "course-2",
        "title": "Advanced Mathematics",
        "description": "Explore advanced mathematical concepts including calculus, linear algebra, and statistics.",
        "tutor_id": TUTOR2_ID,
        "created_at": SEED_TS,
        "updated_at": SEED_TS,
    },
]

DEMO_ENROLLMENTS = [
    {"id": "enrollment-1", "course_id": "course-1", "student_id": STUDENT1_ID,
     "enrolled_at": "2024-01-01T00:00:00Z", "status": "active"},
    {"id": "enrollment-2", "course_id": "course-1", "student_id": STUDENT2_ID,
     "enrolled_at": "2024-01-01T00:00:00Z", "status": "active"},
    {"id": "enrollment-3", "course_id": "course-1", "student_id": STUDENT3_ID,
     "enrolled_at": "2024-01-02T00:00:00Z", "status": "active"},
    {"id": "enrollment-4", "course_id": "course-2", "student_id": STUDENT1_ID,
     "enrolled_at": "2024-01-01T00:00:00Z", "status": "active"},
    {"id": "enrollment-5", "course_id": "course-2", "student_id": STUDENT2_ID,
     "enrolled_at": "2024-01-01T00:00:00Z", "status": "active"},
    {"id": "enrollment-6", "course_id": "course-2", "student_id": STUDENT3_ID,
     "enrolled_at": "2024-01-02T00:00:00Z", "status": "active"},
]

DEMO_MATERIALS = [
    {
        "id": "material-1",
        "course_id": "course-1",
        "title": "Introduction to Programming",
        "description": "Basic concepts of programming and computer science fundamentals",
        "file_url": "/placeholder.pdf",
        "file_type": "application/pdf",
        "file_size": 2048000,
        "created_at": "2024-01-01T00:00:00Z",
    },
    {
        "id": "material-2",
        "course_id": "course-1",
        "title": "Data Structures Overview",
        "description": "Understanding arrays, linked lists, stacks, and queues",
        "file_url": "/placeholder.pptx",
        "file_type": "application/vnd.openxmlformats-officedocument.presentationml.presentation",
        "file_size": 5120000,
        "created_at": "2024-01-02T00:00:00Z",
    },
    {
        "id": "material-3",
        "course_id": "course-1",
        "title": "Algorithm Basics Video",
        "description": "Video lecture on basic algorithms and complexity analysis",
        "file_url": "/placeholder.mp4",
        "file_type": "video/mp4",
        "file_size": 104857600,
        "created_at": "2024-01-03T00:00:00Z",
    },
    {
        "id": "material-4",
        "course_id": "course-2",
        "title": "Calculus Fundamentals",
        "description": "Introduction to differential and integral calculus",
        "file_url": "/placeholder.pdf",
        "file_type": "application/pdf",
        "file_size": 3072000,
        "created_at": "2024-01-01T00:00:00Z",
    },
]

DEMO_QUIZZES = [
    {
        "id": "quiz-1",
        "course_id": "course-1",
        "title": "Programming Fundamentals Quiz",
        "description": "Test your understanding of basic programming concepts",
        "total_marks": 20,
        "time_limit": 30,
        "created_at": "2024-01-01T00:00:00Z",
    },
    {
        "id": "quiz-2",
        "course_id": "course-1",
        "title": "Data Structures Assessment",
        "description": "Evaluate your knowledge of arrays, lists, and basic algorithms",
        "total_marks": 25,
        "time_limit": 45,
        "created_at": "2024-01-05T00:00:00Z",
    },
    {
        "id": "quiz-3",
        "course_id": "course-2",
        "title": "Calculus Basics Test",
        "description": "Assessment on differential and integral calculus",
        "total_marks": 30,
        "time_limit": 60,
        "created_at": "2024-01-01T00:00:00Z",
    },
]

TRUE_FALSE = ["True", "False"]

# 퀴즈별 배점 합계 == DEMO_QUIZZES 의 total_marks
DEMO_QUESTIONS = [
    {
        "id": "q1",
        "quiz_id": "quiz-1",
        "question": "What is a variable in programming?",
        "question_type": "multiple_choice",
        "options": [
            "A container for storing data values",
            "A type of loop",
            "A function parameter",
            "A programming language",
        ],
        "correct_answer": "A container for storing data values",
        "marks": 5,
    },
    {
        "id": "q2",
        "quiz_id": "quiz-1",
        "question": "Python is a compiled language.",
        "question_type": "true_false",
        "options": TRUE_FALSE,
        "correct_answer": "False",
        "marks": 5,
    },
    {
        "id": "q3",
        "quiz_id": "quiz-1",
        "question": "Explain the difference between a list and an array.",
        "question_type": "short_answer",
        "options": None,
        "correct_answer": "Lists are dynamic and can hold different data types, while arrays are fixed-size and typically hold the same data type.",
        "marks": 10,
    },
    {
        "id": "q4",
        "quiz_id": "quiz-2",
        "question": "Which data structure follows the Last-In-First-Out principle?",
        "question_type": "multiple_choice",
        "options": ["Queue", "Stack", "Linked list", "Hash table"],
        "correct_answer": "Stack",
        "marks": 5,
    },
    {
        "id": "q5",
        "quiz_id": "quiz-2",
        "question": "Accessing an array element by index takes constant time.",
        "question_type": "true_false",
        "options": TRUE_FALSE,
        "correct_answer": "True",
        "marks": 5,
    },
    {
        "id": "q6",
        "quiz_id": "quiz-2",
        "question": "What is the worst-case time complexity of linear search?",
        "question_type": "multiple_choice",
        "options": ["O(1)", "O(log n)", "O(n)", "O(n log n)"],
        "correct_answer": "O(n)",
        "marks": 5,
    },
    {
        "id": "q7",
        "quiz_id": "quiz-2",
        "question": "Name the data structure that stores key-value pairs with average O(1) lookup.",
        "question_type": "short_answer",
        "options": None,
        "correct_answer": "Hash table",
        "marks": 10,
    },
    {
        "id": "q8",
        "quiz_id": "quiz-3",
        "question": "What is the derivative of x^2?",
        "question_type": "multiple_choice",
        "options": ["x", "2x", "x^2", "2"],
        "correct_answer": "2x",
        "marks": 10,
    },
    {
        "id": "q9",
        "quiz_id": "quiz-3",
        "question": "The integral of a derivative returns the original function up to a constant.",
        "question_type": "true_false",
        "options": TRUE_FALSE,
        "correct_answer": "True",
        "marks": 10,
    },
    {
        "id": "q10",
        "quiz_id": "quiz-3",
        "question": "What is the limit of 1/x as x approaches infinity?",
        "question_type": "short_answer",
        "options": None,
        "correct_answer": "0",
        "marks": 10,
    },
]

# 과거 응시 기록 (답안 상세는 없음)
DEMO_ATTEMPTS = [
    {"id": "attempt-1", "quiz_id": "quiz-1", "student_id": STUDENT1_ID, "answers": {},
     "score": 18, "total_marks": 20, "submitted_at": "2024-01-15T10:30:00Z"},
    {"id": "attempt-2", "quiz_id": "quiz-2", "student_id": STUDENT1_ID, "answers": {},
     "score": 20, "total_marks": 25, "submitted_at": "2024-01-20T14:15:00Z"},
    {"id": "attempt-3", "quiz_id": "quiz-1", "student_id": STUDENT2_ID, "answers": {},
     "score": 15, "total_marks": 20, "submitted_at": "2024-01-16T11:20:00Z"},
    {"id": "attempt-4", "quiz_id": "quiz-1", "student_id": STUDENT3_ID, "answers": {},
     "score": 19, "total_marks": 20, "submitted_at": "2024-01-15T09:45:00Z"},
    {"id": "attempt-5", "quiz_id": "quiz-2", "student_id": STUDENT3_ID, "answers": {},
     "score": 22, "total_marks": 25, "submitted_at": "2024-01-21T16:30:00Z"},
]

DEMO_POSTS = [
    {
        "id": "post-1",
        "course_id": "course-1",
        "user_id": TUTOR1_ID,
        "user_name": "Dr. John Smith",
        "user_role": "tutor",
        "title": "Welcome to the Course Discussion Forum",
        "content": "Hello everyone! This is our course discussion forum where you can ask questions, share insights, "
                   "and collaborate with your classmates. Please feel free to start new discussions or reply to existing ones.",
        "parent_id": None,
        "created_at": "2024-01-01T00:00:00Z",
        "updated_at": "2024-01-01T00:00:00Z",
    },
    {
        "id": "post-2",
        "course_id": "course-1",
        "user_id": STUDENT1_ID,
        "user_name": "Alice Brown",
        "user_role": "student",
        "title": "Question about Data Structures Assignment",
        "content": "Hi everyone, I'm having trouble understanding the difference between arrays and linked lists. "
                   "Can someone explain when to use each one?",
        "parent_id": None,
        "created_at": "2024-01-02T00:00:00Z",
        "updated_at": "2024-01-02T00:00:00Z",
    },
    {
        "id": "post-3",
        "course_id": "course-1",
        "user_id": STUDENT2_ID,
        "user_name": "Bob Wilson",
        "user_role": "student",
        "title": "",
        "content": "Great question Alice! Arrays are better when you need fast random access to elements, "
                   "while linked lists are more efficient for frequent insertions and deletions.",
        "parent_id": "post-2",
        "created_at": "2024-01-02T10:00:00Z",
        "updated_at": "2024-01-02T10:00:00Z",
    },
    {
        "id": "post-4",
        "course_id": "course-1",
        "user_id": TUTOR1_ID,
        "user_name": "Dr. John Smith",
        "user_role": "tutor",
        "title": "",
        "content": "Excellent explanation Bob! To add to that, arrays have O(1) access time but O(n) insertion/deletion, "
                   "while linked lists have O(n) access but O(1) insertion/deletion at known positions.",
        "parent_id": "post-2",
        "created_at": "2024-01-02T14:00:00Z",
        "updated_at": "2024-01-02T14:00:00Z",
    },
]

DEMO_ASSESSMENTS = []
