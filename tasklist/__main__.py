from tasklist.app import main

raise SystemExit(main())
