from pr_ci_gate.main import main

raise SystemExit(main())
